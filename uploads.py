"""
Photo and video upload pipelines for the admin panel.

Both pipelines walk the same steps:

    upload -> progress -> details -> complete

``select`` validates a batch of local files and derives their previews,
``run`` simulates the transfer one file at a time, the details forms are
edited, and ``confirm`` hands PortfolioItem-shaped records (no id or
created_at yet) to the completion callback. Nothing leaves the process: the
"uploaded" media is the file's data URL.
"""

import asyncio
import logging
import math
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from bson import ObjectId
from pydantic import BaseModel

import media
from schemas import DEFAULT_PHOTOGRAPHER, Category, PublishStatus

logger = logging.getLogger(__name__)

MB = 1024 * 1024


class UploadStep(str, Enum):
    UPLOAD = "upload"
    PROGRESS = "progress"
    DETAILS = "details"
    COMPLETE = "complete"


class FileStatus(str, Enum):
    PENDING = "pending"
    UPLOADING = "uploading"
    COMPLETE = "complete"


class UploadStateError(Exception):
    """Raised when a pipeline operation is called in the wrong step."""


@dataclass
class LocalFile:
    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass
class RejectedFile:
    filename: str
    reason: str


@dataclass
class UploadedFile:
    id: str
    source: LocalFile
    data_url: str
    thumbnail_url: str
    duration: Optional[str] = None
    progress: int = 0
    status: FileStatus = FileStatus.PENDING

    def summary(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "filename": self.source.filename,
            "size": self.source.size,
            "progress": self.progress,
            "status": self.status.value,
            "duration": self.duration,
        }


class PhotoForm(BaseModel):
    categories: List[Category] = []
    status: PublishStatus = "published"
    featured: bool = False
    description: str = ""
    location: str = ""
    date_taken: str = ""


class VideoForm(BaseModel):
    title: str = ""
    categories: List[Category] = []
    status: PublishStatus = "published"
    featured: bool = False
    description: str = ""
    location: str = ""


class UploadPipeline:
    kind = ""
    accept_prefix = ""
    max_file_size = 0
    max_files = 0
    progress_increment = 10
    step_delay = 0.05

    def __init__(self, on_complete: Optional[Callable[[List[Dict[str, Any]]], Any]] = None,
                 step_delay: Optional[float] = None):
        self.id = str(ObjectId())
        self.on_complete = on_complete
        if step_delay is not None:
            self.step_delay = step_delay
        self.step = UploadStep.UPLOAD
        self.files: List[UploadedFile] = []
        self.rejected: List[RejectedFile] = []
        self.overall_progress = 0
        self.closed = False
        self.created_at = time.monotonic()

    @property
    def age(self) -> float:
        """Seconds since the pipeline was opened."""
        return time.monotonic() - self.created_at

    def _require(self, step: UploadStep) -> None:
        if self.step is not step:
            raise UploadStateError(f"{self.kind} upload is in step {self.step.value}, expected {step.value}")

    def rejection_reason(self, content_type: Optional[str], size: Optional[int]) -> Optional[str]:
        """Why a single file can't be accepted, or None. An unknown size is not checked."""
        if not (content_type or "").startswith(self.accept_prefix):
            return f"unsupported media type {content_type or 'unknown'}"
        if size is not None and size > self.max_file_size:
            return f"larger than {self.max_file_size // MB} MB"
        return None

    def validate(self, files: Iterable[LocalFile]) -> Tuple[List[LocalFile], List[RejectedFile]]:
        accepted, rejected = [], []
        for f in files:
            reason = self.rejection_reason(f.content_type, f.size)
            if reason is None and len(accepted) >= self.max_files:
                reason = f"batch limit of {self.max_files} files reached"
            if reason is None:
                accepted.append(f)
            else:
                rejected.append(RejectedFile(f.filename, reason))
        return accepted, rejected

    async def select(self, files: Iterable[LocalFile],
                     rejected_early: Iterable[RejectedFile] = ()) -> List[RejectedFile]:
        """Validate a batch and derive previews. Returns the rejected files.

        ``rejected_early`` carries files turned away before their bytes were
        read. An empty accepted batch leaves the pipeline in the upload step.
        """
        self._require(UploadStep.UPLOAD)
        accepted, rejected = self.validate(files)
        rejected = list(rejected_early) + rejected
        for r in rejected:
            logger.info("Rejected %s upload %s: %s", self.kind, r.filename, r.reason)
        self.rejected.extend(rejected)
        if not accepted:
            return rejected

        self.step = UploadStep.PROGRESS
        for f in accepted:
            self.files.append(await self.prepare(f))
        self.files_prepared()
        return rejected

    async def prepare(self, f: LocalFile) -> UploadedFile:
        raise NotImplementedError

    def files_prepared(self) -> None:
        pass

    async def run(self) -> None:
        """Simulate the transfer, strictly one file after another."""
        self._require(UploadStep.PROGRESS)
        total = len(self.files)
        completed = 0
        for f in self.files:
            f.status = FileStatus.UPLOADING
            for progress in range(0, 101, self.progress_increment):
                await asyncio.sleep(self.step_delay)
                if self.closed:
                    logger.info("%s upload %s closed mid-transfer", self.kind, self.id)
                    return
                f.progress = progress
            f.status = FileStatus.COMPLETE
            f.progress = 100
            completed += 1
            self.overall_progress = math.floor(completed * 100 / total + 0.5)
        self.step = UploadStep.DETAILS

    def build_records(self) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def confirm(self) -> List[Dict[str, Any]]:
        self._require(UploadStep.DETAILS)
        records = self.build_records()
        if self.on_complete is not None:
            self.on_complete(records)
        self.step = UploadStep.COMPLETE
        logger.info("%s upload %s completed with %d files", self.kind, self.id, len(records))
        return records

    def close(self) -> None:
        self.closed = True

    def summary(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "kind": self.kind,
            "step": self.step.value,
            "overall_progress": self.overall_progress,
            "files": [f.summary() for f in self.files],
            "rejected": [{"filename": r.filename, "reason": r.reason} for r in self.rejected],
        }


class PhotoUploadPipeline(UploadPipeline):
    """Photos share one bulk form applied to every file."""

    kind = "photo"
    accept_prefix = "image/"
    max_file_size = 10 * MB
    max_files = 50
    progress_increment = 10
    step_delay = 0.05

    def __init__(self, on_complete=None, step_delay=None):
        super().__init__(on_complete, step_delay)
        self.form = PhotoForm()

    async def prepare(self, f: LocalFile) -> UploadedFile:
        data_url = media.to_data_url(f.data, f.content_type)
        return UploadedFile(id=str(ObjectId()), source=f, data_url=data_url, thumbnail_url=data_url)

    def update_form(self, form: PhotoForm) -> None:
        self.form = form

    def build_records(self) -> List[Dict[str, Any]]:
        return [
            {
                "type": "photo",
                "title": media.sanitize_title(f.source.filename),
                "category": list(self.form.categories),
                "media_url": f.data_url,
                "thumbnail_url": f.data_url,
                "description": self.form.description,
                "client_name": "",
                "location": self.form.location,
                "date_taken": self.form.date_taken,
                "photographer": DEFAULT_PHOTOGRAPHER,
                "featured": self.form.featured,
                "status": self.form.status,
            }
            for f in self.files
        ]

    def summary(self) -> Dict[str, Any]:
        data = super().summary()
        data["form"] = self.form.model_dump()
        return data


class VideoUploadPipeline(UploadPipeline):
    """Videos get a thumbnail and duration each, and one form per file."""

    kind = "video"
    accept_prefix = "video/"
    max_file_size = 500 * MB
    max_files = 10
    progress_increment = 5
    step_delay = 0.03

    def __init__(self, on_complete=None, step_delay=None, probe: Optional[media.VideoProbe] = None):
        super().__init__(on_complete, step_delay)
        self.probe = probe or media.VideoProbe()
        self.forms: List[VideoForm] = []
        self.current_index = 0

    def _derive(self, f: LocalFile) -> Tuple[str, str]:
        with media.spooled_video(f.data, f.filename) as path:
            seconds = media.probe_duration(self.probe, path)
            if seconds is None:
                return media.FALLBACK_THUMBNAIL, media.FALLBACK_DURATION
            return media.extract_thumbnail(self.probe, path, seconds), media.format_duration(seconds)

    async def prepare(self, f: LocalFile) -> UploadedFile:
        thumbnail_url, duration = await asyncio.to_thread(self._derive, f)
        return UploadedFile(
            id=str(ObjectId()),
            source=f,
            data_url=media.to_data_url(f.data, f.content_type),
            thumbnail_url=thumbnail_url,
            duration=duration,
        )

    def files_prepared(self) -> None:
        self.forms = [VideoForm(title=media.sanitize_title(f.source.filename)) for f in self.files]
        self.current_index = 0

    @property
    def current_form(self) -> Optional[VideoForm]:
        if not self.forms:
            return None
        return self.forms[self.current_index]

    def next_file(self) -> int:
        if self.current_index < len(self.forms) - 1:
            self.current_index += 1
        return self.current_index

    def previous_file(self) -> int:
        if self.current_index > 0:
            self.current_index -= 1
        return self.current_index

    def update_form(self, index: int, form: VideoForm) -> None:
        if not 0 <= index < len(self.forms):
            raise IndexError(f"no video at position {index}")
        self.forms[index] = form

    def build_records(self) -> List[Dict[str, Any]]:
        records = []
        for f, form in zip(self.files, self.forms):
            records.append({
                "type": "video",
                "title": form.title or media.sanitize_title(f.source.filename),
                "category": list(form.categories),
                "media_url": f.data_url,
                "thumbnail_url": f.thumbnail_url,
                "description": form.description,
                "client_name": "",
                "location": form.location,
                "date_taken": "",
                "photographer": DEFAULT_PHOTOGRAPHER,
                "featured": form.featured,
                "status": form.status,
                "duration": f.duration or media.FALLBACK_DURATION,
                "video_source": "uploaded",
            })
        return records

    def summary(self) -> Dict[str, Any]:
        data = super().summary()
        data["current_index"] = self.current_index
        data["forms"] = [form.model_dump() for form in self.forms]
        return data
