import json
from pathlib import Path

import pytest
import zstandard as zstd

from revisionpack.artifact import (
    ArtifactError,
    ArtifactValidationError,
    read_revision,
    read_revision_document,
    write_revision,
)
from revisionpack.core.models import Revision, Section


@pytest.fixture()
def sample_revision() -> Revision:
    return Revision(
        sections=(
            Section(
                key="intro",
                type="markdown",
                content={"text": "Hello\r\nworld", "weight": 0.1234567890123456},
            ),
            Section(key="gone", type="markdown", content=None),
        ),
        metadata={"_id": "rev-001", "title": "Sample", "createdBy": {"_id": "user-1"}},
    )


@pytest.mark.parametrize("file_name", ["sample.json", "sample.json.zst"])
def test_round_trip_write_and_read(
    sample_revision: Revision, tmp_path: Path, file_name: str
) -> None:
    revision_path = write_revision(sample_revision, tmp_path / "nested" / file_name)

    loaded = read_revision(revision_path)

    assert loaded.id == "rev-001"
    assert loaded.section_keys() == ["intro", "gone"]
    assert loaded.sections[0].content == {"text": "Hello\r\nworld", "weight": 0.1234567890123456}
    assert loaded == sample_revision
    assert loaded.sections[1].content is None
    assert loaded.metadata["createdBy"] == {"_id": "user-1"}


def test_compressed_file_is_zstd_frame(sample_revision: Revision, tmp_path: Path) -> None:
    revision_path = write_revision(sample_revision, tmp_path / "sample.json.zst")

    raw = zstd.ZstdDecompressor().decompressobj().decompress(revision_path.read_bytes())

    assert json.loads(raw)["_id"] == "rev-001"


def test_written_json_is_stable(sample_revision: Revision, tmp_path: Path) -> None:
    first = write_revision(sample_revision, tmp_path / "first.json").read_text(encoding="utf-8")
    second = write_revision(sample_revision, tmp_path / "second.json").read_text(encoding="utf-8")

    assert first == second
    assert first.endswith("\n")


def test_invalid_json_fails(tmp_path: Path) -> None:
    revision_path = tmp_path / "broken.json"
    revision_path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ArtifactValidationError, match="Invalid revision JSON"):
        read_revision(revision_path)


def test_invalid_zstd_fails(tmp_path: Path) -> None:
    revision_path = tmp_path / "broken.json.zst"
    revision_path.write_bytes(b"definitely not zstd")

    with pytest.raises(ArtifactError, match="Invalid zstd revision file"):
        read_revision(revision_path)


def test_document_shape_is_validated(tmp_path: Path) -> None:
    not_object = tmp_path / "list.json"
    not_object.write_text("[]", encoding="utf-8")
    no_sections = tmp_path / "no-sections.json"
    no_sections.write_text(json.dumps({"_id": "rev-1"}), encoding="utf-8")

    with pytest.raises(ArtifactValidationError, match="JSON object"):
        read_revision_document(not_object)
    with pytest.raises(ArtifactValidationError, match="'sections' must be a JSON array"):
        read_revision_document(no_sections)


def test_invalid_sections_are_reported_as_validation_errors(tmp_path: Path) -> None:
    revision_path = tmp_path / "duplicates.json"
    revision_path.write_text(
        json.dumps(
            {
                "_id": "rev-dup",
                "sections": [
                    {"key": "a", "type": "markdown"},
                    {"key": "a", "type": "markdown"},
                ],
            }
        ),
        encoding="utf-8",
    )

    with pytest.raises(ArtifactValidationError, match="Duplicate section keys"):
        read_revision(revision_path)


def test_example_revisions_are_valid() -> None:
    old = read_revision(Path("examples/revisions/guide_v1.json"))
    new = read_revision(Path("examples/revisions/guide_v2.json"))

    assert old.id == "rev-0001"
    assert new.id == "rev-0002"
    assert old.section_keys() == ["intro", "install", "usage", "faq", "video"]
    assert old.sections_by_key()["video"].type == "media"


def test_unserializable_revision_is_rejected(tmp_path: Path) -> None:
    revision = Revision(
        sections=(Section(key="a", type="data", content={"value": object()}),),
        metadata={"_id": "rev-bad"},
    )

    with pytest.raises(ArtifactValidationError, match="not JSON serializable"):
        write_revision(revision, tmp_path / "bad.json")
    assert not (tmp_path / "bad.json").exists()
