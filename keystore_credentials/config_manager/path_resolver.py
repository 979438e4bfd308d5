"""
Path resolution for keystore and credentials files.

All paths are anchored at the project root and normalized lexically:
``.`` and ``..`` segments are collapsed without touching the filesystem, so
symlinks are not followed.
"""

import os
from pathlib import Path
from typing import Optional, Union


class PathResolver:
    """
    Path resolver anchored at a project root.

    Resolution order:
    1. Absolute paths → use as-is
    2. Relative paths → joined onto the project root
    3. Result → lexically normalized
    """

    @staticmethod
    def get_project_root(project_root: Optional[Union[str, Path]] = None) -> Path:
        """
        Get the absolute project root.

        Falls back to the current working directory when no root is given.
        """
        if project_root is None:
            return Path.cwd()
        return Path(os.path.abspath(Path(project_root).expanduser()))

    @staticmethod
    def normalize(path: Union[str, Path]) -> Path:
        """Collapse ``.`` and ``..`` segments without filesystem access."""
        return Path(os.path.normpath(path))

    @staticmethod
    def resolve_base_dir(
        project_root: Union[str, Path], base_dir: Optional[Union[str, Path]]
    ) -> Path:
        """
        Resolve a base directory against the project root.

        Args:
            project_root: Absolute project root
            base_dir: Directory relative to the root, an absolute path, or None
                for the root itself

        Returns:
            Absolute, normalized base directory

        Examples:
            >>> PathResolver.resolve_base_dir("/work/app", "a/../a")
            PosixPath('/work/app/a')
        """
        root = Path(project_root)
        if base_dir is None:
            return PathResolver.normalize(root)
        return PathResolver.normalize(root / base_dir)

    @staticmethod
    def resolve_file(base_dir: Union[str, Path], file_name: str) -> Path:
        """Join ``file_name`` onto ``base_dir`` and normalize the result."""
        return PathResolver.normalize(Path(base_dir) / file_name)

    @staticmethod
    def is_regular_file(path: Path) -> bool:
        """True only for an existing regular file (directories don't count)."""
        return path.is_file()
