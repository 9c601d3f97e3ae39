# userhub/services/storage.py

import os
import shutil
import tempfile
from datetime import datetime
from pathlib import Path
from typing import BinaryIO
from loguru import logger
from starlette.concurrency import run_in_threadpool

from userhub.config import StorageConfig
from userhub.core.result import Ok, Result, bad_request, not_found


CHUNK_SIZE = 64 * 1024


class StorageService:
    """
    Stores, serves and deletes named files inside a single upload directory.

    Names are flat: anything that would resolve outside the directory is
    rejected. Blocking disk work is pushed to the worker thread pool.
    """

    def __init__(self, config: StorageConfig):
        self.config = config
        logger.debug(f"Initializing storage service in {config.upload_dir}")

    def get_config(self) -> StorageConfig:
        return self.config

    def init_storage_directory(self):
        upload_dir = self.config.upload_dir
        if not upload_dir.exists():
            logger.info(f"Creating storage directory {upload_dir}")
            upload_dir.mkdir(parents=True, exist_ok=True)
        elif self.config.environment == "dev":
            logger.info(f"Cleaning storage directory {upload_dir} (dev environment)")
            for path in upload_dir.iterdir():
                if path.is_dir():
                    shutil.rmtree(path)
                else:
                    path.unlink()

    async def save_file(self, file_name: str, content: bytes) -> Result[dict]:
        logger.debug(f"save_file: storing {file_name} ({len(content)} bytes)")

        error = self._validate_name(file_name)
        if error is not None:
            return error
        if len(content) > self.config.max_file_size:
            return bad_request(f"File {file_name} exceeds the limit of {self.config.max_file_size} bytes")

        path = self.config.upload_dir / file_name
        await run_in_threadpool(path.write_bytes, content)
        return Ok(self._describe(file_name, len(content)))

    async def save_stream(self, file_name: str, stream: BinaryIO) -> Result[dict]:
        logger.debug(f"save_stream: storing {file_name}")

        error = self._validate_name(file_name)
        if error is not None:
            return error

        path = self.config.upload_dir / file_name
        size = await run_in_threadpool(self._copy_limited, stream, path)
        if size is None:
            return bad_request(f"File {file_name} exceeds the limit of {self.config.max_file_size} bytes")
        return Ok(self._describe(file_name, size))

    async def get_file(self, file_name: str) -> Result[Path]:
        logger.debug(f"get_file: looking up {file_name}")

        error = self._validate_name(file_name)
        if error is not None:
            return error

        path = self.config.upload_dir / file_name
        if not path.is_file():
            return not_found(f"File not found: {file_name}")
        return Ok(path)

    async def delete_file(self, file_name: str) -> bool:
        logger.debug(f"delete_file: removing {file_name}")

        if self._validate_name(file_name) is not None:
            return False

        path = self.config.upload_dir / file_name
        if not path.is_file():
            return False
        await run_in_threadpool(path.unlink)
        return True

    # -------------------------------
    # Helpers
    # -------------------------------

    def _validate_name(self, file_name: str):
        if not file_name or file_name in (".", "..") or Path(file_name).name != file_name or "\\" in file_name:
            return bad_request(f"Invalid file name: {file_name!r}")
        return None

    def _copy_limited(self, stream: BinaryIO, path: Path) -> int | None:
        """
        Copies the stream into a temporary file next to path and moves it
        into place once complete. Returns the number of bytes written, or
        None if the limit is hit, in which case path is left untouched.
        """
        size = 0
        with tempfile.NamedTemporaryFile(dir=path.parent, suffix=".part", delete=False) as tmp:
            tmp_path = Path(tmp.name)
            while True:
                chunk = stream.read(CHUNK_SIZE)
                if not chunk:
                    break
                size += len(chunk)
                if size > self.config.max_file_size:
                    break
                tmp.write(chunk)

        if size > self.config.max_file_size:
            tmp_path.unlink(missing_ok=True)
            return None
        os.replace(tmp_path, path)
        return size

    def _describe(self, file_name: str, size: int) -> dict:
        return {
            "file_name": file_name,
            "created_at": datetime.now().isoformat(),
            "size": size,
            "base_url": f"{self.config.base_url}/{self.config.endpoint}/{file_name}",
            "secure_url": f"{self.config.secure_url}/{self.config.endpoint}/{file_name}",
        }
