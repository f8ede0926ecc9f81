# newmachine/config.py

from dataclasses import dataclass
from pathlib import Path

MIN_NEOVIM_VERSION = "0.9.0"
INSTALL_ROOT = Path("/usr/local")
BACKUP_SUBDIR = Path("migration") / "dotfiles"
DOTFILES = (
    ".bash_history",
    ".gitconfig.local",
    ".ssh",
    ".bashrc",
    ".bashrc.user",
)
TOOLS = ("bash", "starship", "neovim")


@dataclass(frozen=True)
class Settings:
    """
    Everything a run needs, resolved once from the command line.
    """

    home: Path
    backup_dir: Path
    dotfiles: tuple[str, ...] = DOTFILES
    dotfiles_dir: Path | None = None
    install_root: Path = INSTALL_ROOT
    min_neovim_version: str = MIN_NEOVIM_VERSION
    tools: tuple[str, ...] = TOOLS
    skip_backup: bool = False
    refresh_index: bool = False

    @classmethod
    def from_args(cls, args, home: Path | None = None) -> "Settings":
        home = home or Path.home()
        backup_dir = Path(args.backup_dir).expanduser() if args.backup_dir else home / BACKUP_SUBDIR
        dotfiles_dir = Path(args.dotfiles_dir).expanduser() if args.dotfiles_dir else None
        return cls(
            home=home,
            backup_dir=backup_dir,
            dotfiles_dir=dotfiles_dir,
            install_root=Path(args.install_root),
            min_neovim_version=args.min_neovim,
            tools=tuple(args.tools or TOOLS),
            skip_backup=args.no_backup,
            refresh_index=args.refresh,
        )
