#!/usr/bin/env python3

"""
AVM - A Python utility for managing @aws-amplify/cli versions

Usage:
  avm [--config FILE] <command> [options]

Commands:
  install <version>  Install a version (exact, dist-tag such as "beta", or range such as "11")
  use <version>      Install if needed and switch the active binary to a version
  bin                Print the directory holding the active binary
  list               List installed versions
  current            Print the active version
  init               Initialize a default config file in ~/.config/avm/

Configuration file is searched in the following locations:
1. Specified path via --config
2. Current directory (avm.yaml)
3. User config directory (~/.config/avm/avm.yaml)
4. System-wide location (/etc/avm/avm.yaml)
"""

from avmcli import run_cli

if __name__ == "__main__":
    run_cli()
