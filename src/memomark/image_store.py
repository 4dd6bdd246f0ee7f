"""File-backed storage for memo images."""

import asyncio
from concurrent.futures import ThreadPoolExecutor
import hashlib
import logging
import os
from typing import Protocol

from memomark.markdown_error import ImageResolutionError


class ImageStorage(Protocol):
    """Storage collaborator that resolves `image://` filenames to bytes."""

    async def get(self, filename: str) -> bytes:
        """Fetch the bytes stored under a filename."""

    async def save(self, data: bytes, suggested_name: str) -> str:
        """Store image bytes and return the filename they can be fetched by."""


class FileImageStore:
    """
    Stores images as files in one directory.

    Saved files are named after the MD5 hash of their content, so saving the
    same image twice yields the same filename.
    """

    def __init__(self, directory: str) -> None:
        """
        Initialize the store, creating its directory if needed.

        Args:
            directory: Directory holding the image files
        """
        self._directory = directory
        os.makedirs(directory, exist_ok=True)
        self._executor = ThreadPoolExecutor(max_workers=1)
        self._logger = logging.getLogger("FileImageStore")

    @property
    def directory(self) -> str:
        return self._directory

    def close(self) -> None:
        """Shut down the I/O worker thread once pending operations finish."""
        self._executor.shutdown(wait=True)

    def _path(self, filename: str) -> str:
        # Keep lookups inside the store directory
        return os.path.join(self._directory, os.path.basename(filename))

    @staticmethod
    def filename_for(data: bytes, suggested_name: str) -> str:
        """
        Build the content-addressed filename for image bytes.

        Args:
            data: The image bytes
            suggested_name: Original name; only its extension is kept

        Returns:
            `<md5 hex digest>.<extension>`, defaulting the extension to png
        """
        digest = hashlib.md5(data).hexdigest()
        _, ext = os.path.splitext(suggested_name)
        return f"{digest}.{ext[1:] or 'png'}"

    async def get(self, filename: str) -> bytes:
        """
        Read an image file.

        Args:
            filename: Name of the file within the store

        Returns:
            The file contents

        Raises:
            ImageResolutionError: If the file cannot be read
        """
        path = self._path(filename)

        def _read() -> bytes:
            with open(path, 'rb') as f:
                return f.read()

        try:
            return await asyncio.get_running_loop().run_in_executor(self._executor, _read)

        except OSError as e:
            self._logger.warning("Failed to read image %s: %s", path, e)
            raise ImageResolutionError(f"Failed to read image: {filename}", {"filename": filename}) from e

    async def save(self, data: bytes, suggested_name: str) -> str:
        """
        Write image bytes under their content-addressed filename.

        Args:
            data: The image bytes
            suggested_name: Original name of the image

        Returns:
            The filename the image was stored under
        """
        filename = self.filename_for(data, suggested_name)
        path = self._path(filename)

        def _write() -> None:
            with open(path, 'wb') as f:
                f.write(data)

        await asyncio.get_running_loop().run_in_executor(self._executor, _write)
        self._logger.info("Image saved: %s", path)
        return filename

    async def delete(self, filename: str) -> bool:
        """
        Delete an image file.

        Args:
            filename: Name of the file within the store

        Returns:
            True if a file was removed, False if it could not be
        """
        path = self._path(filename)
        try:
            await asyncio.get_running_loop().run_in_executor(self._executor, os.remove, path)

        except OSError as e:
            self._logger.warning("Failed to delete image %s: %s", path, e)
            return False

        self._logger.info("Image deleted: %s", path)
        return True
