# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Protomatter command-line interface.

Commands:
  protomatter config show         Display effective settings
  protomatter config init         Write a protomatter.yaml template
  protomatter inspect MOD:NAME    Show a blueprint's delegation chain

Commands auto-receive the ApplicationContext via @click.pass_obj.
"""

from .cli import create_cli, main

__all__ = [
    "create_cli",
    "main",
]
