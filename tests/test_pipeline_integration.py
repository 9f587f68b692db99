from __future__ import annotations

import csv
import io
import tempfile
from datetime import datetime
from pathlib import Path

import PIL.Image

from contractgen import config
from contractgen.models import reset_engine
from contractgen.pipeline import run as run_module
from contractgen.pipeline.ingest import load_records
from contractgen.pipeline.run import run_batch
from contractgen.storage import list_documents


def _signature_png() -> bytes:
    buf = io.BytesIO()
    PIL.Image.new("RGBA", (200, 60), (0, 0, 0, 0)).save(buf, format="PNG")
    return buf.getvalue()


def _write_csv(path: Path) -> None:
    with path.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.DictWriter(handle, fieldnames=["legal_entity_name", "authorized_signer_name", "covered_outlets"])
        writer.writeheader()
        writer.writerow({"legal_entity_name": "Seaside Resort", "authorized_signer_name": "Jordan Lee", "covered_outlets": "Pool|Beach"})
        writer.writerow({"legal_entity_name": "Harbor Inn", "authorized_signer_name": "", "covered_outlets": ""})


def test_batch_outputs_signed_documents() -> None:
    with tempfile.TemporaryDirectory() as temp_dir:
        out_dir = Path(temp_dir) / "out"
        config.set_out_dir(out_dir)
        reset_engine()
        csv_path = Path(temp_dir) / "records.csv"
        _write_csv(csv_path)

        results = run_batch(
            load_records(csv_path),
            signature=_signature_png(),
            signed_at=datetime(2026, 10, 19, 9, 30),
        )
        assert results.failed == []
        assert len(results.ready) == 2
        assert (out_dir / "seaside-resort" / "Daze_Pilot_Agreement_Seaside_Resort_SIGNED.pdf").exists()
        assert (out_dir / "harbor-inn" / "Daze_Pilot_Agreement_Harbor_Inn_SIGNED.pdf").exists()
        assert all(row.signed for row in list_documents())


def test_failed_record_is_logged_and_skipped(monkeypatch) -> None:
    real_generate = run_module.generate_agreement

    def flaky_generate(record, **kwargs):
        if record.legal_entity_name == "Harbor Inn":
            raise RuntimeError("renderer exploded")
        return real_generate(record, **kwargs)

    with tempfile.TemporaryDirectory() as temp_dir:
        out_dir = Path(temp_dir) / "out"
        config.set_out_dir(out_dir)
        reset_engine()
        csv_path = Path(temp_dir) / "records.csv"
        _write_csv(csv_path)
        monkeypatch.setattr(run_module, "generate_agreement", flaky_generate)

        results = run_batch(load_records(csv_path))
        assert len(results.ready) == 1
        assert results.failed == ["harbor-inn"]
        error_log = out_dir / "harbor-inn" / "error.log"
        assert error_log.read_text(encoding="utf-8") == "renderer exploded"
        assert [row.slug for row in list_documents()] == ["seaside-resort"]
