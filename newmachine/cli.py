# newmachine/cli.py
#!/usr/bin/env python3
import sys
import argparse

from newmachine.bootstrap import run_setup
from newmachine.config import INSTALL_ROOT, MIN_NEOVIM_VERSION, TOOLS, Settings
from newmachine.utils.log import console, setup_logging


class RichParser(argparse.ArgumentParser):
    def error(self, message):
        console.print(f"[bold red]Error:[/] {message}\n")
        self.print_help()
        sys.exit(2)


def parse_args(argv=None):
    parser = RichParser(
        prog="newmachine",
        description="Set up a fresh Linux machine: back up dotfiles, install bash tooling, starship and neovim",
        allow_abbrev=False,
    )

    parser.add_argument(
        "--tools",
        nargs="+",
        choices=TOOLS,
        default=None,
        help="Tools to set up, in order (default: %s)" % " ".join(TOOLS),
    )
    parser.add_argument(
        "--dotfiles-dir",
        default=None,
        help="Directory holding bash/bashrc and aliases to copy into $HOME",
    )
    parser.add_argument(
        "--backup-dir", default=None, help="Backup destination (default: ~/migration/dotfiles)"
    )
    parser.add_argument("--no-backup", action="store_true", help="Skip the dotfile backup")
    parser.add_argument(
        "--min-neovim",
        default=MIN_NEOVIM_VERSION,
        help="Minimum acceptable Neovim version (default: %(default)s)",
    )
    parser.add_argument(
        "--install-root",
        default=str(INSTALL_ROOT),
        help="Prefix for release tarballs (default: %(default)s)",
    )
    parser.add_argument(
        "--refresh", action="store_true", help="Refresh the package index first"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.verbose)
    settings = Settings.from_args(args)
    run_setup(settings)


if __name__ == "__main__":
    main()
