"""Unit tests for transfer.engine module."""

from pathlib import Path

import pytest
from PIL import Image as PILImage

from media_flattener.models import FileRecord, FileStatus, TransferAction
from media_flattener.transfer.engine import TransferEngine, finalize


def _resolved(source: Path, target: Path) -> FileRecord:
    record = FileRecord(source_path=source, source_dir=source.parent, target_path=target)
    record.status = FileStatus.RESOLVED
    return record


def _claimed(*records: FileRecord) -> set:
    return {str(r.target_path) for r in records}


class TestTransferCopy:
    """Tests for the copy branch of TransferEngine.transfer()."""

    def test_copies_bytes(self, input_root, output_dir, make_file, progress):
        output_dir.mkdir()
        source = make_file(input_root, "clip.MOV", b"\x00\x01movie")
        record = _resolved(source, output_dir / "2024-05-01-10-00-00-000.mov")

        result = TransferEngine(claimed=_claimed(record), progress=progress).transfer(record)

        assert result.success
        assert result.action is TransferAction.COPY
        assert record.status is FileStatus.TRANSFERRED
        assert record.target_path.read_bytes() == b"\x00\x01movie"
        assert source.exists()
        assert progress.count == 1

    def test_missing_source_is_per_file_failure(self, input_root, output_dir, progress):
        output_dir.mkdir()
        record = _resolved(input_root / "gone.jpg", output_dir / "a.jpg")

        result = TransferEngine(progress=progress).transfer(record)

        assert not result.success
        assert not result.skipped
        assert record.status is FileStatus.FAILED
        assert "gone.jpg" in record.error
        assert not (output_dir / "a.jpg").exists()
        assert not (output_dir / "a.jpg.part").exists()
        assert progress.count == 1

    def test_failure_does_not_stop_later_files(self, input_root, output_dir, make_file, progress):
        output_dir.mkdir()
        first = _resolved(make_file(input_root, "1.jpg"), output_dir / "1.jpg")
        broken = _resolved(input_root / "gone.jpg", output_dir / "2.jpg")
        last = _resolved(make_file(input_root, "3.jpg"), output_dir / "3.jpg")

        results = TransferEngine(progress=progress).transfer_all([first, broken, last])

        assert [r.success for r in results] == [True, False, True]
        assert (output_dir / "1.jpg").exists()
        assert (output_dir / "3.jpg").exists()
        assert progress.count == 3

    def test_already_failed_record_skipped(self, input_root, output_dir, progress):
        record = FileRecord(source_path=input_root / "a.jpg", source_dir=input_root)
        record.fail("cannot stat")

        result = TransferEngine(progress=progress).transfer(record)

        assert result.skipped
        assert not result.success
        assert record.error == "cannot stat"
        assert progress.count == 1


@pytest.mark.integration
class TestTransferConvert:
    """Tests for the HEIC branch of TransferEngine.transfer()."""

    def test_heic_becomes_jpg(self, input_root, output_dir, progress):
        output_dir.mkdir()
        # Pillow detects the format from content, so PNG bytes under a
        # .heic name go through the conversion branch
        source = input_root / "IMG_0001.HEIC"
        PILImage.new("RGB", (60, 40), color="red").save(source, "PNG")
        record = _resolved(source, output_dir / "2024-05-01-10-00-00-000.heic")

        result = TransferEngine(claimed=_claimed(record), progress=progress).transfer(record)

        assert result.success
        assert result.action is TransferAction.CONVERT
        assert record.target_path == output_dir / "2024-05-01-10-00-00-000.jpg"
        assert not (output_dir / "2024-05-01-10-00-00-000.heic").exists()
        with PILImage.open(record.target_path) as img:
            assert img.format == "JPEG"

    def test_converted_name_does_not_collide(self, input_root, output_dir, make_file, progress):
        output_dir.mkdir()
        jpg = _resolved(make_file(input_root, "a.jpg"), output_dir / "t.jpg")
        source = input_root / "b.heic"
        PILImage.new("RGB", (10, 10)).save(source, "PNG")
        heic = _resolved(source, output_dir / "t.heic")

        engine = TransferEngine(claimed=_claimed(jpg, heic), progress=progress)
        engine.transfer_all([jpg, heic])

        assert jpg.target_path == output_dir / "t.jpg"
        assert heic.target_path == output_dir / "t-02.jpg"
        assert jpg.target_path.read_bytes() == b"data"

    def test_undecodable_heic_fails_alone(self, input_root, output_dir, make_file, progress):
        output_dir.mkdir()
        broken = _resolved(make_file(input_root, "bad.heic", b"garbage"), output_dir / "bad.heic")
        fine = _resolved(make_file(input_root, "ok.mov"), output_dir / "ok.mov")

        results = TransferEngine(progress=progress).transfer_all([broken, fine])

        assert not results[0].success
        assert results[0].action is TransferAction.CONVERT
        assert broken.status is FileStatus.FAILED
        assert results[1].success
        assert list(output_dir.iterdir()) == [output_dir / "ok.mov"]

    def test_oversized_image_fails_alone(self, input_root, output_dir, make_file, progress, monkeypatch):
        """Pillow's decompression bomb guard is a per-file failure."""
        output_dir.mkdir()
        source = input_root / "huge.heic"
        PILImage.new("RGB", (300, 300)).save(source, "PNG")
        huge = _resolved(source, output_dir / "huge.heic")
        fine = _resolved(make_file(input_root, "ok.mov"), output_dir / "ok.mov")
        monkeypatch.setattr(PILImage, "MAX_IMAGE_PIXELS", 100)

        results = TransferEngine(progress=progress).transfer_all([huge, fine])

        assert not results[0].success
        assert huge.status is FileStatus.FAILED
        assert "exceeds limit" in huge.error
        assert results[1].success
        assert progress.count == 2


@pytest.mark.integration
class TestResize:
    """Tests for TransferEngine.resize()."""

    def _jpeg(self, path: Path, size) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        PILImage.new("RGB", size, color="green").save(path, "JPEG")
        return path

    def test_wide_image_resized(self, output_dir, progress):
        target = self._jpeg(output_dir / "a.jpg", (400, 200))
        record = _resolved(target, target)
        record.status = FileStatus.TRANSFERRED

        result = TransferEngine(resize_width=100, progress=progress).resize(record)

        assert result.success and result.changed
        assert record.status is FileStatus.RESIZED
        with PILImage.open(target) as img:
            assert img.size == (100, 50)

    def test_narrow_image_not_upscaled(self, output_dir, progress):
        target = self._jpeg(output_dir / "a.jpg", (80, 60))
        record = _resolved(target, target)
        record.status = FileStatus.TRANSFERRED

        result = TransferEngine(resize_width=100, progress=progress).resize(record)

        assert result.success
        assert not result.changed
        assert record.status is FileStatus.TRANSFERRED
        with PILImage.open(target) as img:
            assert img.size == (80, 60)

    def test_non_jpeg_skipped_but_counted(self, output_dir, progress):
        record = _resolved(Path("/in/clip.mov"), output_dir / "clip.mov")
        record.status = FileStatus.TRANSFERRED

        result = TransferEngine(progress=progress).resize(record)

        assert result.skipped
        assert result.success
        assert progress.count == 1

    def test_failed_record_skipped(self, output_dir, progress):
        record = _resolved(Path("/in/a.jpg"), output_dir / "a.jpg")
        record.fail("copy failed")

        result = TransferEngine(progress=progress).resize(record)

        assert result.skipped
        assert not result.success
        assert progress.count == 1

    def test_resize_failure_keeps_copy(self, output_dir, progress):
        output_dir.mkdir()
        target = output_dir / "a.jpg"
        target.write_text("not really a jpeg")
        record = _resolved(Path("/in/a.jpg"), target)
        record.status = FileStatus.TRANSFERRED

        result = TransferEngine(progress=progress).resize(record)

        assert not result.success
        assert not result.skipped
        assert record.status is FileStatus.FAILED
        assert target.read_text() == "not really a jpeg"
        assert progress.count == 1

    def test_oversized_image_keeps_copy(self, output_dir, progress, monkeypatch):
        target = self._jpeg(output_dir / "a.jpg", (300, 300))
        before = target.read_bytes()
        record = _resolved(Path("/in/a.jpg"), target)
        record.status = FileStatus.TRANSFERRED
        monkeypatch.setattr(PILImage, "MAX_IMAGE_PIXELS", 100)

        result = TransferEngine(resize_width=100, progress=progress).resize(record)

        assert not result.success
        assert record.status is FileStatus.FAILED
        assert target.read_bytes() == before


class TestFinalize:
    """Tests for finalize() function."""

    def test_marks_surviving_records_done(self):
        transferred = FileRecord(Path("/in/a"), Path("/in"), status=FileStatus.TRANSFERRED)
        resized = FileRecord(Path("/in/b"), Path("/in"), status=FileStatus.RESIZED)
        failed = FileRecord(Path("/in/c"), Path("/in"), status=FileStatus.FAILED)

        finalize([transferred, resized, failed])

        assert transferred.status is FileStatus.DONE
        assert resized.status is FileStatus.DONE
        assert failed.status is FileStatus.FAILED
