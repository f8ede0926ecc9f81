from newmachine.tools.bash import BashInstaller
from newmachine.tools.neovim import NeovimInstaller
from newmachine.tools.starship import StarshipInstaller

INSTALLERS = {
    "bash": BashInstaller,
    "starship": StarshipInstaller,
    "neovim": NeovimInstaller,
}
