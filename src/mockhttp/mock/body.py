"""
mockhttp Reusable Request Body

Buffering/replay decorator for request bodies that must be read more than
once: by the normalizer, by rules referencing the raw body, and by a possible
pass-through to the real upstream.

Not safe for concurrent readers. A single resolve call owns an instance.
"""

import io
from typing import Any, Union


class ReusableBody(io.RawIOBase):
    """
    File-like body that rewinds itself after reaching end-of-stream.

    Reads consume from a forward buffer while mirroring the consumed bytes
    into a backing buffer. When a read hits the end, the backing buffer is
    replayed into the forward buffer so the next full read reproduces the
    original bytes.

    Example:
        body = ReusableBody(b'{"name": "William"}')
        body.read()  # b'{"name": "William"}'
        body.read()  # b'{"name": "William"}'
    """

    def __init__(self, source: Union[bytes, bytearray, str, Any, None] = None):
        """
        Initialize the body.

        Args:
            source: Raw bytes, text (UTF-8 encoded) or a readable file-like
                    object, which is drained once up front
        """
        super().__init__()
        self._forward = io.BytesIO(self._drain(source))
        self._backing = io.BytesIO()

    @staticmethod
    def _drain(source: Any) -> bytes:
        if source is None:
            return b''
        if isinstance(source, str):
            return source.encode('utf-8')
        if isinstance(source, (bytes, bytearray, memoryview)):
            return bytes(source)
        if hasattr(source, 'read'):
            data = source.read()
            return data.encode('utf-8') if isinstance(data, str) else bytes(data or b'')
        # Iterable of chunks (e.g. a streaming generator)
        return b''.join(
            chunk.encode('utf-8') if isinstance(chunk, str) else bytes(chunk)
            for chunk in source
        )

    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        data = self._forward.read(len(buffer))
        if not data:
            # End of stream: rewind so the next reader sees the full body
            self.reset()
            return 0

        self._backing.write(data)
        buffer[:len(data)] = data
        return len(data)

    def read(self, size: int = -1) -> bytes:
        if size is None or size < 0:
            data = self._forward.read()
            self._backing.write(data)
            self.reset()
            return data
        return super().read(size)

    def readall(self) -> bytes:
        return self.read()

    def tell(self) -> int:
        return self._forward.tell()

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        if whence == io.SEEK_CUR:
            offset += self.tell()
        elif whence == io.SEEK_END:
            offset += len(self)
        target = min(max(offset, 0), len(self))

        self.reset()
        self._backing.write(self._forward.read(target))
        return target

    def reset(self) -> None:
        """Replay everything consumed so far back into the forward buffer."""
        remaining = self._forward.read()
        replay = self._backing.getvalue() + remaining
        self._forward = io.BytesIO(replay)
        self._backing = io.BytesIO()

    def __len__(self) -> int:
        return len(self._forward.getbuffer())

    def __bool__(self) -> bool:
        return True

    def getvalue(self) -> bytes:
        """Full body without disturbing the read position."""
        return self._backing.getvalue() + self._forward.getvalue()[self._forward.tell():]
