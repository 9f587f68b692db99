from __future__ import annotations

from contractgen.pipeline.generate import sanitize_entity_name
from contractgen.pipeline.ingest import slug_from_name


def test_slug_sanitization() -> None:
    slug = slug_from_name("Seaside / Resort: Holdings, LLC!")
    assert slug == "seaside-resort-holdings-llc"


def test_slug_never_empty() -> None:
    slug = slug_from_name("")
    assert slug
    assert "/" not in slug


def test_filename_part_has_no_path_characters() -> None:
    assert sanitize_entity_name("../etc/passwd") == "___etc_passwd"
