from typing import List, Optional

from modules.core.error_handler import ValidationError
from modules.core.models import UploadItem, UploadResponse, VideoFile
from modules.core.state_manager import Component, EventLog
from modules.services.api_client import run_request

DEFAULT_PAGE_SIZE = 50

FILE_MODE = "file"
URL_MODE = "url"


class UploadFeed(Component):
    """Job history fetched page by page.

    ``has_more`` only records whether the last page was full, so when the
    final page holds exactly ``page_size`` items one more (empty) fetch is
    needed before it turns False. The upload endpoint does not report a total.

    Only ``load_more`` is guarded against overlapping with itself; ``refresh``
    may race with either call and the last response to land wins.
    """

    name = "uploads"

    def __init__(self, api, page_size: int = DEFAULT_PAGE_SIZE, events: Optional[EventLog] = None):
        super().__init__(api, events)
        self.page_size = page_size
        self.items: List[UploadItem] = []
        self.offset = 0
        self.has_more = True
        self.in_flight = False

    async def refresh(self) -> bool:
        self.state.start()
        try:
            page = await run_request(self.api.list_uploads, self.page_size, 0)
        except Exception as e:
            self._report_failure(e, "Failed to load uploads")
            return False
        self.items = list(page)
        self.offset = len(page)
        self.has_more = len(page) == self.page_size
        self.state.succeed()
        return True

    async def load_more(self) -> bool:
        if not self.has_more or self.in_flight:
            return False
        self.in_flight = True
        self.state.start()
        try:
            page = await run_request(self.api.list_uploads, self.page_size, self.offset)
        except Exception as e:
            self._report_failure(e, "Failed to load uploads")
            return False
        finally:
            self.in_flight = False
        self.items = self.items + list(page)
        self.offset += len(page)
        self.has_more = len(page) == self.page_size
        self.state.succeed()
        return True


class UploadSubmission(Component):
    """Validates and submits one processing job, then refreshes the feed.

    A job comes either from a local file or from a pasted URL; ``mode``
    selects which of the two is sent. File mode is the default.
    """

    name = "upload"

    def __init__(self, api, feed: UploadFeed, events: Optional[EventLog] = None):
        super().__init__(api, events)
        self.feed = feed
        self.mode = FILE_MODE
        self.url = ""
        self.file: Optional[VideoFile] = None
        self.last_upload: Optional[UploadResponse] = None

    @staticmethod
    def validate(url: str) -> str:
        cleaned = (url or "").strip()
        if not cleaned:
            raise ValidationError("Paste a video URL first.", error_code="EMPTY_URL")
        return cleaned

    @staticmethod
    def validate_file(file: Optional[VideoFile]) -> VideoFile:
        if file is None or not file.content:
            raise ValidationError("Choose a video file first.", error_code="EMPTY_FILE")
        return file

    async def submit(self, url: Optional[str] = None, file: Optional[VideoFile] = None,
                     mode: Optional[str] = None) -> Optional[UploadResponse]:
        """
        Submit a source video for watermark removal.

        Args:
            url: Source video URL; switches to URL mode when no mode is given
            file: Local video; switches to file mode when no mode is given
            mode: ``"file"`` or ``"url"``; overrides the inference above. An
                explicit file mode replaces the held file with ``file``

        Returns:
            UploadResponse or None when validation or the request failed
        """
        if url is not None:
            self.url = url
        if file is not None or mode == FILE_MODE:
            self.file = file
        if mode is not None:
            self.mode = mode
        elif file is not None:
            self.mode = FILE_MODE
        elif url is not None:
            self.mode = URL_MODE

        self.state.message = None
        try:
            if self.mode == FILE_MODE:
                request = {'file': self.validate_file(self.file)}
            else:
                request = {'url': self.validate(self.url)}
        except ValidationError as e:
            self._report_invalid(e)
            return None

        self.state.start()
        try:
            result = await run_request(self.api.upload_video, **request)
        except Exception as e:
            self._report_failure(e, "Upload failed")
            return None

        self.last_upload = result
        self._report_info(f"Processing started. Task ID: {result.task_id}")
        self.state.succeed()
        self.logger.info(f"Upload {result.upload_id} queued as task {result.task_id}")
        await self.feed.refresh()
        return result
