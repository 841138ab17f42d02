import asyncio

import pytest

import media
from uploads import (
    MB,
    FileStatus,
    LocalFile,
    PhotoForm,
    PhotoUploadPipeline,
    RejectedFile,
    UploadStateError,
    UploadStep,
    VideoForm,
    VideoUploadPipeline,
)

from .test_media import FakeProbe


class SizedFile(LocalFile):
    """A LocalFile that reports a size without holding that many bytes."""

    def __init__(self, filename, content_type, size):
        super().__init__(filename, content_type, b"x")
        self._size = size

    @property
    def size(self):
        return self._size


def _image(name="sunset_shoot.jpg", size=2 * MB):
    return SizedFile(name, "image/jpeg", size)


def _video(name="first_dance.mp4", size=20 * MB):
    return SizedFile(name, "video/mp4", size)


def _run(coro):
    return asyncio.run(coro)


async def _select_and_run(pipeline, files):
    rejected = await pipeline.select(files)
    if pipeline.step is UploadStep.PROGRESS:
        await pipeline.run()
    return rejected


class TestValidation:
    def test_photo_rules(self):
        pipeline = PhotoUploadPipeline(step_delay=0)
        files = [
            _image(),
            SizedFile("notes.txt", "text/plain", 10),
            _image("huge.png", 11 * MB),
        ]

        accepted, rejected = pipeline.validate(files)

        assert [f.filename for f in accepted] == ["sunset_shoot.jpg"]
        assert [(r.filename, r.reason) for r in rejected] == [
            ("notes.txt", "unsupported media type text/plain"),
            ("huge.png", "larger than 10 MB"),
        ]

    def test_oversized_video_leaves_empty_batch_in_upload(self):
        pipeline = VideoUploadPipeline(step_delay=0, probe=FakeProbe())

        rejected = _run(pipeline.select([_video("ceremony.mp4", 600 * MB)]))

        assert [r.reason for r in rejected] == ["larger than 500 MB"]
        assert pipeline.step is UploadStep.UPLOAD
        assert pipeline.files == []

    def test_image_in_video_batch_is_rejected(self):
        pipeline = VideoUploadPipeline(step_delay=0, probe=FakeProbe())

        rejected = _run(pipeline.select([_image(), _video()]))

        assert [r.filename for r in rejected] == ["sunset_shoot.jpg"]
        assert [f.source.filename for f in pipeline.files] == ["first_dance.mp4"]
        assert pipeline.step is UploadStep.PROGRESS

    def test_batch_limit(self):
        pipeline = VideoUploadPipeline(step_delay=0, probe=FakeProbe())

        accepted, rejected = pipeline.validate([_video(f"clip_{i}.mp4") for i in range(12)])

        assert len(accepted) == 10
        assert [r.filename for r in rejected] == ["clip_10.mp4", "clip_11.mp4"]
        assert rejected[0].reason == "batch limit of 10 files reached"

    def test_rejection_reason_without_bytes(self):
        pipeline = VideoUploadPipeline(step_delay=0, probe=FakeProbe())

        assert pipeline.rejection_reason("video/mp4", 600 * MB) == "larger than 500 MB"
        assert pipeline.rejection_reason("video/mp4", None) is None
        assert pipeline.rejection_reason(None, 1) == "unsupported media type unknown"

    def test_early_rejections_come_first(self):
        pipeline = PhotoUploadPipeline(step_delay=0)

        rejected = _run(pipeline.select(
            [SizedFile("a.pdf", "application/pdf", 1)],
            rejected_early=[RejectedFile("huge.png", "larger than 10 MB")],
        ))

        assert [r.filename for r in rejected] == ["huge.png", "a.pdf"]
        assert [r["filename"] for r in pipeline.summary()["rejected"]] == ["huge.png", "a.pdf"]

    def test_rejections_are_kept_on_the_pipeline(self):
        pipeline = PhotoUploadPipeline(step_delay=0)

        _run(pipeline.select([SizedFile("a.pdf", "application/pdf", 1)]))

        assert pipeline.summary()["rejected"] == [
            {"filename": "a.pdf", "reason": "unsupported media type application/pdf"}
        ]


class TestProgress:
    def test_files_complete_sequentially(self):
        pipeline = PhotoUploadPipeline(step_delay=0)

        _run(_select_and_run(pipeline, [_image("a.jpg"), _image("b.jpg"), _image("c.jpg")]))

        assert pipeline.step is UploadStep.DETAILS
        assert pipeline.overall_progress == 100
        assert all(f.status is FileStatus.COMPLETE and f.progress == 100 for f in pipeline.files)

    def test_run_requires_accepted_files(self):
        pipeline = PhotoUploadPipeline(step_delay=0)

        with pytest.raises(UploadStateError):
            _run(pipeline.run())

    def test_select_only_once(self):
        pipeline = PhotoUploadPipeline(step_delay=0)
        _run(pipeline.select([_image()]))

        with pytest.raises(UploadStateError):
            _run(pipeline.select([_image()]))

    def test_second_file_waits_for_first(self):
        pipeline = PhotoUploadPipeline(step_delay=0)
        seen = []

        async def scenario():
            await pipeline.select([_image("a.jpg"), _image("b.jpg")])
            task = asyncio.create_task(pipeline.run())
            while not task.done():
                seen.append(tuple(f.status for f in pipeline.files))
                await asyncio.sleep(0)
            await task

        _run(scenario())

        assert (FileStatus.UPLOADING, FileStatus.UPLOADING) not in seen
        assert (FileStatus.PENDING, FileStatus.COMPLETE) not in seen

    def test_close_stops_simulation(self):
        pipeline = PhotoUploadPipeline(step_delay=0.01)

        async def scenario():
            await pipeline.select([_image("a.jpg"), _image("b.jpg")])
            task = asyncio.create_task(pipeline.run())
            await asyncio.sleep(0.03)
            pipeline.close()
            await task

        _run(scenario())

        assert pipeline.step is UploadStep.PROGRESS
        assert pipeline.files[1].status is FileStatus.PENDING


class TestPhotoDetails:
    def test_bulk_form_applies_to_every_photo(self):
        received = []
        pipeline = PhotoUploadPipeline(on_complete=received.append, step_delay=0)
        _run(_select_and_run(pipeline, [
            LocalFile("beach_day.jpg", "image/jpeg", b"\xff\xd8one"),
            LocalFile("temple.png", "image/png", b"\x89PNGtwo"),
        ]))
        pipeline.update_form(PhotoForm(
            categories=["Pre-Wedding"], status="draft", featured=True,
            description="Sunset shoot", location="Kerala", date_taken="2024-01-20",
        ))

        records = pipeline.confirm()

        assert received == [records]
        assert pipeline.step is UploadStep.COMPLETE
        assert [r["title"] for r in records] == ["beach day", "temple"]
        for r in records:
            assert r["type"] == "photo"
            assert r["category"] == ["Pre-Wedding"]
            assert r["status"] == "draft"
            assert r["featured"] is True
            assert r["location"] == "Kerala"
            assert r["media_url"] == r["thumbnail_url"]
            assert "id" not in r and "created_at" not in r
        assert records[0]["media_url"] == media.to_data_url(b"\xff\xd8one", "image/jpeg")

    def test_confirm_before_details_fails(self):
        pipeline = PhotoUploadPipeline(step_delay=0)
        _run(pipeline.select([_image()]))

        with pytest.raises(UploadStateError):
            pipeline.confirm()

    def test_records_feed_the_store(self, empty_store):
        pipeline = PhotoUploadPipeline(on_complete=empty_store.add_portfolio_batch, step_delay=0)
        _run(_select_and_run(pipeline, [_image("a.jpg"), _image("b.jpg")]))

        pipeline.confirm()

        assert [i.title for i in empty_store.portfolio.all()] == ["a", "b"]
        assert all(i.type == "photo" for i in empty_store.portfolio.all())


class TestVideoDetails:
    @pytest.fixture
    def pipeline(self):
        pipeline = VideoUploadPipeline(step_delay=0, probe=FakeProbe(seconds=272))
        _run(_select_and_run(pipeline, [_video("first_dance.mp4"), _video("vows.mov")]))
        return pipeline

    def test_derived_assets(self, pipeline):
        first = pipeline.files[0]

        assert first.duration == "4:32"
        assert first.thumbnail_url.startswith("data:image/jpeg;base64,")
        assert first.data_url.startswith("data:video/mp4;base64,")

    def test_each_video_is_probed_once(self, pipeline):
        assert pipeline.probe.duration_calls == 2
        assert pipeline.probe.frame_requests == [68, 68]

    def test_forms_default_to_sanitized_titles(self, pipeline):
        assert [f.title for f in pipeline.forms] == ["first dance", "vows"]
        assert pipeline.current_form.title == "first dance"

    def test_navigation_stays_in_bounds(self, pipeline):
        assert pipeline.previous_file() == 0
        assert pipeline.next_file() == 1
        assert pipeline.next_file() == 1
        assert pipeline.current_form.title == "vows"

    def test_per_file_forms(self, pipeline):
        pipeline.update_form(1, VideoForm(title="The Vows", categories=["Wedding"], featured=True))

        records = pipeline.confirm()

        assert [r["title"] for r in records] == ["first dance", "The Vows"]
        assert records[1]["category"] == ["Wedding"]
        assert records[1]["featured"] is True
        assert records[0]["featured"] is False
        for r in records:
            assert r["type"] == "video"
            assert r["video_source"] == "uploaded"
            assert r["duration"] == "4:32"
            assert r["date_taken"] == ""

    def test_blank_title_uses_filename(self, pipeline):
        pipeline.update_form(0, VideoForm(title=""))

        assert pipeline.confirm()[0]["title"] == "first dance"

    def test_update_form_out_of_range(self, pipeline):
        with pytest.raises(IndexError):
            pipeline.update_form(5, VideoForm())

    def test_extraction_failure_degrades(self):
        pipeline = VideoUploadPipeline(step_delay=0, probe=FakeProbe(fail=True))
        _run(_select_and_run(pipeline, [_video()]))

        f = pipeline.files[0]
        assert f.thumbnail_url == media.FALLBACK_THUMBNAIL
        assert f.duration == "0:00"
        assert pipeline.step is UploadStep.DETAILS
        assert pipeline.probe.duration_calls == 1
        assert pipeline.probe.frame_requests == []
