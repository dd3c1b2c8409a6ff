# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Internal utilities for Protomatter.

This package contains private implementation details that are not part of
the public API and may change without notice.

Modules:
- logging: Logging configuration
"""
