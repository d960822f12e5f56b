"""Copy pre-generated overlay images and reports into the public asset directory."""

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List

from src.core.config import COMPONENT_MAPS_DIR, LAYERS, METHODOLOGY_REPORT, LayerConfig

logger = logging.getLogger(__name__)

# Rendered at the top level of the source tree rather than under component_maps/
ROOT_LEVEL_IMAGES = {"wildfire_intensity_overlay.png"}


@dataclass(frozen=True)
class AssetEntry:
    """One file to stage."""

    src: Path
    dest: Path

    @property
    def name(self) -> str:
        return self.src.name


@dataclass
class StageResult:
    """Outcome of a staging run."""

    copied: int = 0
    skipped: int = 0
    copied_files: List[Path] = field(default_factory=list)
    skipped_files: List[Path] = field(default_factory=list)

    @property
    def has_skips(self) -> bool:
        return self.skipped > 0

    def summary(self) -> str:
        return f"Setup complete: {self.copied} copied, {self.skipped} skipped"


def build_default_manifest(
    source_root: Path,
    public_dir: Path,
    layers: Iterable[LayerConfig] = LAYERS,
) -> List[AssetEntry]:
    """
    Build the manifest of overlay images and the methodology report.

    Each image is staged at the path the viewer requests it from, so
    destinations follow the layer's image path under the public directory.

    Args:
        source_root: Directory holding the generated images and report
        public_dir: Directory the viewer reads assets from
        layers: Layer configurations whose images are staged

    Returns:
        List of asset entries, images first
    """
    entries = []
    for layer in layers:
        filename = Path(layer.image).name
        if filename in ROOT_LEVEL_IMAGES:
            src = source_root / filename
        else:
            src = source_root / COMPONENT_MAPS_DIR / filename
        entries.append(AssetEntry(src=src, dest=public_dir / layer.image))

    entries.append(
        AssetEntry(src=source_root / METHODOLOGY_REPORT, dest=public_dir / METHODOLOGY_REPORT)
    )
    return entries


def stage_asset(entry: AssetEntry) -> bool:
    """
    Copy a single file.

    Args:
        entry: Asset to copy

    Returns:
        True if copied, False if the source was missing or the copy failed
    """
    try:
        entry.dest.parent.mkdir(parents=True, exist_ok=True)
        if entry.src.exists():
            shutil.copyfile(entry.src, entry.dest)
            logger.info(f"✓ Copied: {entry.name}")
            return True
        logger.info(f"✗ Not found: {entry.name}")
        return False
    except OSError as e:
        logger.error(f"✗ Error copying {entry.name}: {e}")
        return False


def stage_assets(manifest: Iterable[AssetEntry]) -> StageResult:
    """
    Copy every manifest entry independently and count the outcomes.

    Staging is additive: files already present in the destination tree that
    are not part of the manifest are left untouched.

    Args:
        manifest: Entries to copy

    Returns:
        StageResult with copied/skipped counts
    """
    result = StageResult()

    for entry in manifest:
        if stage_asset(entry):
            result.copied += 1
            result.copied_files.append(entry.dest)
        else:
            result.skipped += 1
            result.skipped_files.append(entry.src)

    logger.info(result.summary())
    return result
