"""Scoped staging of uploaded files."""

import os
import shutil
import tempfile
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from starlette.datastructures import UploadFile


@asynccontextmanager
async def staged_upload(upload: UploadFile, uploads_dir: Path) -> AsyncIterator[Path]:
    """
    Copy an upload into a private temp directory for the length of one request.

    The directory and the file are removed on every exit path, including
    rejections raised inside the block.
    """
    uploads_dir.mkdir(parents=True, exist_ok=True)
    try:
        with tempfile.TemporaryDirectory(dir=uploads_dir) as tmpdir:
            staged = Path(tmpdir) / "upload"
            with open(staged, "wb") as f:
                await upload.seek(0)
                shutil.copyfileobj(upload.file, f)
            yield staged
    finally:
        await upload.close()


def is_json_upload(upload: UploadFile) -> bool:
    return os.path.basename(upload.filename or "").lower().endswith(".json")
