"""Reading genome exports from plain text files or ZIP archives."""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path

from snpmatch.config import ParserSettings
from snpmatch.errors import ArchiveMemberNotFoundError, InputError

logger = logging.getLogger(__name__)


def _is_zip(path: Path) -> bool:
    return path.suffix.lower() == ".zip"


def extract_from_zip(zip_path: str | Path, token: str, encoding: str = "utf-8") -> str:
    """Return the decoded text of the first member whose name contains ``token``."""

    zip_path = Path(zip_path)
    try:
        with zipfile.ZipFile(zip_path) as archive:
            for info in archive.infolist():
                if info.is_dir() or token not in info.filename:
                    continue
                logger.debug("Reading %s from %s", info.filename, zip_path)
                return archive.read(info).decode(encoding)
    except (OSError, zipfile.BadZipFile) as exc:
        raise InputError(f"Could not read archive {zip_path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise InputError(f"Archive member in {zip_path} is not valid {encoding}: {exc}") from exc

    raise ArchiveMemberNotFoundError(str(zip_path), token)


def read_genome_text(path: str | Path, settings: ParserSettings | None = None) -> str:
    """Load export text from ``path``, unpacking ZIP archives when needed."""

    settings = settings or ParserSettings()
    path = Path(path)

    if _is_zip(path):
        return extract_from_zip(path, settings.archive_member_token, settings.encoding)

    try:
        return path.read_text(encoding=settings.encoding)
    except UnicodeDecodeError as exc:
        raise InputError(f"{path} is not valid {settings.encoding}: {exc}") from exc
    except OSError as exc:
        raise InputError(f"Could not read {path}: {exc}") from exc
