"""Rich rendering of a log tree: archived sessions and per-origin archives."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.text import Text
from rich.tree import Tree

from session_logger.core.constants import (
    ERROR_DIR_NAME,
    FULL_DIR_NAME,
    LATEST_LOG_NAME,
    LOG_SUFFIX,
    WARN_DIR_NAME,
)
from session_logger.filesystem.rotation import list_archives

if TYPE_CHECKING:
    from pathlib import Path


def format_size_to_kb(size_bytes: int) -> float:
    return size_bytes / 1024


def _file_label(path: Path, style: str = "") -> Text:
    label = Text(path.name, style=style)
    label.append(f" ({format_size_to_kb(path.stat().st_size):.1f}KB)", style="dim")
    return label


def build_archive_tree(root: Path) -> Tree:
    """
    Build a tree of everything the logger keeps under ``root``.

    :param root: Root of the log tree.
    :return: Tree with one branch per ``full/``, ``warn/`` and ``error/``.
    """
    tree = Tree(Text(str(root), style="bold cyan"))

    full_dir = root.joinpath(FULL_DIR_NAME)
    full_branch = tree.add(Text(f"{FULL_DIR_NAME}/", style="bold"))
    latest = full_dir.joinpath(LATEST_LOG_NAME)
    if latest.is_file():
        full_branch.add(_file_label(latest, style="green"))
    for archive in list_archives(full_dir):
        full_branch.add(_file_label(archive))

    for dir_name, style in ((WARN_DIR_NAME, "yellow"), (ERROR_DIR_NAME, "red")):
        branch = tree.add(Text(f"{dir_name}/", style=f"bold {style}"))
        directory = root.joinpath(dir_name)
        if not directory.is_dir():
            continue
        for origin_log in sorted(directory.glob(f"*{LOG_SUFFIX}")):
            branch.add(_file_label(origin_log, style=style))

    return tree
