import os

import pytest

from braw2ilpd import pipeline
from braw2ilpd.attributes import ImmersiveAttribute
from braw2ilpd.models import WriteResult
from braw2ilpd.pipeline import MISSING_PAYLOAD_WARNING, extract_clip, run_extraction
from braw2ilpd.sdk import (
    ClipOpenError,
    CodecUnavailableError,
    ImmersiveUnsupportedError,
    open_immersive_clip,
)
from braw2ilpd.tests.fakes import SAMPLE_ILPD, FakeFactory, FakeImmersiveClip


def test_writes_primary_payload_into_directory(tmp_path, fake_clip):
    result = run_extraction(fake_clip, "clip001.braw", output_arg=str(tmp_path))

    target = tmp_path / "CAM1.ABCD1234.ilpd"
    assert result.success is True
    assert result.output_name == "CAM1.ABCD1234.ilpd"
    assert result.primary.status == "written"
    assert result.primary.path == str(target)
    assert target.read_text(encoding="utf-8") == SAMPLE_ILPD
    assert result.report is None
    assert len(result.attributes) == 6


def test_default_output_goes_to_working_directory(tmp_path, monkeypatch, fake_clip):
    monkeypatch.chdir(tmp_path)

    result = run_extraction(fake_clip, "clip001.braw")

    assert result.primary.path == "CAM1.ABCD1234.ilpd"
    assert (tmp_path / "CAM1.ABCD1234.ilpd").exists()


def test_report_written_next_to_primary(tmp_path, fake_clip):
    result = run_extraction(fake_clip, "clip001.braw", output_arg=str(tmp_path), write_report=True)

    report = tmp_path / "CAM1.ABCD1234_detailed_attributes.txt"
    assert result.report.status == "written"
    assert result.report.path == str(report)
    assert "OpticalProjectionData" in report.read_text(encoding="utf-8")


def test_missing_payload_is_a_repeatable_warning(tmp_path, sample_values):
    del sample_values[ImmersiveAttribute.PROJECTION_DATA]

    for _ in range(2):
        result = run_extraction(FakeImmersiveClip(sample_values), "clip001.braw", output_arg=str(tmp_path))

        assert result.success is True
        assert result.primary.status == "skipped"
        assert MISSING_PAYLOAD_WARNING in result.warnings
        assert os.listdir(tmp_path) == []


def test_report_still_written_without_payload(tmp_path, sample_values):
    del sample_values[ImmersiveAttribute.PROJECTION_DATA]

    result = run_extraction(FakeImmersiveClip(sample_values), "clip001.braw",
                            output_arg=str(tmp_path), write_report=True)

    assert result.primary.status == "skipped"
    assert result.report.status == "written"
    assert os.listdir(tmp_path) == ["CAM1.ABCD1234_detailed_attributes.txt"]


def test_extension_advisory_is_a_warning(tmp_path, fake_clip):
    target = tmp_path / "lens.xml"

    result = run_extraction(fake_clip, "clip001.braw", output_arg=str(target))

    assert result.success is True
    assert target.read_text(encoding="utf-8") == SAMPLE_ILPD
    assert any(".xml" in warning for warning in result.warnings)


def test_primary_failure_is_reported_separately_from_report(tmp_path, fake_clip, monkeypatch):
    monkeypatch.setattr(pipeline, "write_atomic",
                        lambda path, content: WriteResult(success=False, path=path, error="disk full"))

    result = run_extraction(fake_clip, "clip001.braw", output_arg=str(tmp_path), write_report=True)

    assert result.success is False
    assert result.primary.status == "failed"
    assert "disk full" in result.primary.message
    assert result.report.status == "written"


def test_unresolvable_output_path_fails_both_artifacts(tmp_path, fake_clip):
    blocker = tmp_path / "blocker"
    blocker.write_text("x")

    result = run_extraction(fake_clip, "clip001.braw", output_arg=str(blocker / "sub"), write_report=True)

    assert result.success is False
    assert result.primary.status == "failed"
    assert result.report.status == "failed"


def test_invalid_output_path_is_a_failed_result(tmp_path, fake_clip):
    result = run_extraction(fake_clip, "clip001.braw", output_arg=str(tmp_path / "bad\0dir"))

    assert result.success is False
    assert result.primary.status == "failed"
    assert os.listdir(tmp_path) == []


# --- Scoped clip acquisition ---

def test_resources_released_in_reverse_order():
    factory = FakeFactory(values={})

    with open_immersive_clip(lambda: factory, "clip001.braw") as clip:
        assert clip is factory.immersive
        assert factory.events == []

    assert factory.events == ["release immersive", "release clip", "release codec", "release factory"]


def test_resources_released_when_block_raises():
    factory = FakeFactory(values={})

    with pytest.raises(RuntimeError):
        with open_immersive_clip(lambda: factory, "clip001.braw"):
            raise RuntimeError("boom")

    assert factory.events == ["release immersive", "release clip", "release codec", "release factory"]


def test_open_failure_releases_codec_and_factory():
    factory = FakeFactory(values={}, open_fails=True)

    with pytest.raises(ClipOpenError) as excinfo:
        with open_immersive_clip(lambda: factory, "clip001.braw"):
            pass

    assert excinfo.value.exit_code == 4
    assert factory.events == ["release codec", "release factory"]


def test_missing_immersive_interface():
    factory = FakeFactory(values={}, immersive=False)

    with pytest.raises(ImmersiveUnsupportedError) as excinfo:
        with open_immersive_clip(lambda: factory, "clip001.braw"):
            pass

    assert excinfo.value.exit_code == 5
    assert factory.events == ["release clip", "release codec", "release factory"]


def test_codec_and_factory_failures():
    with pytest.raises(CodecUnavailableError) as excinfo:
        with open_immersive_clip(lambda: None, "clip001.braw"):
            pass
    assert excinfo.value.exit_code == 2

    factory = FakeFactory(codec_fails=True)
    with pytest.raises(CodecUnavailableError) as excinfo:
        with open_immersive_clip(lambda: factory, "clip001.braw"):
            pass
    assert excinfo.value.exit_code == 3
    assert factory.events == ["release factory"]


def test_extract_clip_runs_pipeline_and_releases(tmp_path, sample_values):
    factory = FakeFactory(values=sample_values)

    result = extract_clip(lambda: factory, "clip001.braw", output_arg=str(tmp_path))

    assert result.primary.status == "written"
    assert factory.codec.opened == ["clip001.braw"]
    assert factory.events[-1] == "release factory"
