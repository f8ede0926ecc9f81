from setuptools import setup, find_packages

setup(
    name="newmachine",
    version="0.1.0",
    description="newmachine: back up dotfiles and install bash tooling, starship and neovim on a fresh Linux box",
    author="newmachine developers",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=["rich", "requests"],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "newmachine=newmachine.cli:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: POSIX :: Linux",
    ],
)
