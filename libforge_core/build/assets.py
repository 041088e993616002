"""
Asset file collection and copying
"""

import logging
import shutil
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path

from libforge_core.config import AssetGlob, AssetSpec
from libforge_core.model.project import BuildResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileInputOutput:
    input: Path
    output: Path


def _glob(pattern: str, cwd: Path, ignore: tuple[str, ...] = ()) -> list[str]:
    """Paths matching ``pattern`` relative to ``cwd``, minus ``ignore`` matches."""
    if not cwd.is_dir():
        return []
    ignored = {path for ignored_glob in ignore for path in cwd.glob(ignored_glob)}
    return [
        path.relative_to(cwd).as_posix()
        for path in sorted(cwd.glob(pattern))
        if path not in ignored
    ]


def collect_assets(assets: tuple[AssetSpec, ...], workspace_root: Path, output_path: str) -> list[FileInputOutput]:
    """
    Expand asset specs into concrete copy operations.

    A plain glob string is matched from the workspace root and each match lands
    directly in the output path. An AssetGlob is matched from its ``input``
    directory and keeps its relative path below ``<output_path>/<output>``.
    """
    workspace_root = Path(workspace_root)
    out_dir = workspace_root / output_path
    files = []

    for asset in assets:
        if isinstance(asset, AssetGlob):
            input_dir = workspace_root / asset.input
            for match in _glob(asset.glob, input_dir, asset.ignore):
                files.append(FileInputOutput(
                    input=input_dir / match,
                    output=out_dir / asset.output / match,
                ))
        else:
            for match in _glob(asset, workspace_root):
                files.append(FileInputOutput(
                    input=workspace_root / match,
                    output=out_dir / Path(match).name,
                ))

    return files


def _copy(file: FileInputOutput) -> None:
    if file.input.is_dir():
        shutil.copytree(file.input, file.output, dirs_exist_ok=True)
    else:
        file.output.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(file.input, file.output)


def copy_assets(files: list[FileInputOutput], max_workers: int = 8) -> BuildResult:
    """
    Copy asset files concurrently.

    Any failed copy fails the whole step, even if other files were copied.
    """
    if not files:
        return BuildResult.ok()

    logger.info("Copying asset files...")
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [executor.submit(_copy, file) for file in files]

    errors = [future.exception() for future in futures if future.exception() is not None]
    if errors:
        message = f"Could not copy asset files: {errors[0]}"
        logger.error(message)
        return BuildResult.failed(message)

    logger.info("Done copying asset files.")
    return BuildResult.ok()
