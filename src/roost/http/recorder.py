"""Status recorder — observes the status code written to a response.

``StatusRecorder`` wraps any ``ResponseWriter`` by composition. Header
access and body writes pass straight through; ``write_header`` is
intercepted, remembered, then forwarded unchanged. Other observers can
be layered the same way without knowing about each other::

    recorder = StatusRecorder(writer)
    await handler(request, recorder)
    recorder.status  # 200 unless the handler set something else
"""

from roost.http.headers import MutableHeaders
from roost.http.writer import ResponseWriter


class StatusRecorder:
    """A ``ResponseWriter`` that remembers the last explicitly set status."""

    __slots__ = ("_status", "_writer")

    def __init__(self, writer: ResponseWriter) -> None:
        self._writer = writer
        self._status = 200

    @property
    def status(self) -> int:
        return self._status

    @property
    def headers(self) -> MutableHeaders:
        return self._writer.headers

    def write_header(self, status: int) -> None:
        self._status = status
        self._writer.write_header(status)

    def write(self, data: bytes | str) -> int:
        return self._writer.write(data)
