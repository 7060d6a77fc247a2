"""Tests for the publish error hierarchy."""

from nbpublish.errors import (
    ConversionFailedError,
    PublishError,
    RelocationFailedError,
    SourceNotFoundError,
)


def test_every_stage_is_a_publish_error():
    for exc in (
        SourceNotFoundError("x.ipynb"),
        ConversionFailedError("fake", "boom"),
        RelocationFailedError("post", "/site/_posts", "gone"),
    ):
        assert isinstance(exc, PublishError)


def test_exit_codes_are_distinct():
    codes = {
        SourceNotFoundError("x.ipynb").exit_code,
        ConversionFailedError("fake", "boom").exit_code,
        RelocationFailedError("post", "/p", "gone").exit_code,
        RelocationFailedError("assets", "/a", "gone", partial=True).exit_code,
    }
    assert len(codes) == 4
    assert 0 not in codes


def test_source_not_found_message():
    err = SourceNotFoundError("missing.ipynb")
    assert err.stage == "source"
    assert "missing.ipynb" in str(err)
    assert err.reason == "no such file"


def test_conversion_failed_chains_cause():
    cause = OSError("disk full")
    err = ConversionFailedError("nbconvert-cli", "exited 1", stderr="trace", cause=cause)
    assert err.__cause__ is cause
    assert err.stderr == "trace"
    assert str(err) == "nbconvert-cli conversion failed: exited 1"


def test_relocation_failed_names_artifact():
    err = RelocationFailedError("assets", "/site/assets/notes_files", "permission denied", partial=True)
    assert err.stage == "relocate"
    assert err.artifact == "assets"
    assert "assets" in str(err)
    assert "/site/assets/notes_files" in str(err)
