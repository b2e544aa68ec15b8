"""
Tests for ACM snapshot loading and publishing
"""
import asyncio
import json

import httpx
import pytest

from acm_calculator.exceptions import SnapshotLoadError
from acm_calculator.models.training import ProgrammeVariant, Scheme, TrainerType, Venue
from acm_calculator.services.snapshot_service import SnapshotService, SnapshotStore

GENERIC_VARIANTS = [
    ProgrammeVariant.INHOUSE,
    ProgrammeVariant.ROT_INHOUSE,
    ProgrammeVariant.COACHING_MENTORING,
    ProgrammeVariant.PUBLIC,
    ProgrammeVariant.ROT_PUBLIC,
]


class TestBaseline:
    def test_edition(self, baseline):
        assert baseline.version.acm_table_edition == "November 2025"
        assert baseline.version.acm_guide_edition == "September 2025"

    def test_rates(self, baseline):
        assert baseline.rates.inhouse.full_day == 10500
        assert baseline.rates.public_training.max_pax_per_employer == 9
        assert baseline.rates.elearning.hour_table[7] == 875

    @pytest.mark.parametrize("variant", GENERIC_VARIANTS)
    def test_every_generic_triple_has_one_row(self, baseline, variant):
        for venue in Venue:
            for trainer in TrainerType:
                assert baseline.find_row(variant, venue, trainer) is not None

    def test_dedicated_variants_have_no_row(self, baseline):
        assert baseline.find_row(ProgrammeVariant.ELEARNING, Venue.EMPLOYER_PREMISES, TrainerType.EXTERNAL) is None

    def test_slb_scheme(self, baseline):
        slb = baseline.scheme_config(Scheme.SLB)
        assert TrainerType.OVERSEAS not in slb.allowed_trainer_types
        assert slb.allowed_variants == {
            ProgrammeVariant.INHOUSE,
            ProgrammeVariant.ROT_INHOUSE,
            ProgrammeVariant.COACHING_MENTORING,
        }


class TestLoadFile:
    def test_partial_document_merged_over_baseline(self, tmp_path):
        path = tmp_path / "acm.json"
        path.write_text(json.dumps({
            "version": {"acm_table_edition": "March 2026"},
            "rates": {"inhouse": {"full_day": 11000}, "elearning": {"hour_table": {"7": 900}}},
        }))
        snapshot = SnapshotService().load_file(str(path))
        assert snapshot.version.acm_table_edition == "March 2026"
        assert snapshot.version.acm_guide_edition == "September 2025"
        assert snapshot.rates.inhouse.full_day == 11000
        assert snapshot.rates.inhouse.half_day == 6000
        assert snapshot.rates.elearning.hour_table[7] == 900
        assert snapshot.rates.elearning.hour_table[4] == 500
        assert len(snapshot.matrix) == 10

    def test_missing_file(self, tmp_path):
        with pytest.raises(SnapshotLoadError):
            SnapshotService().load_file(str(tmp_path / "missing.json"))

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "acm.json"
        path.write_text("{not json")
        with pytest.raises(SnapshotLoadError) as exc_info:
            SnapshotService().load_file(str(path))
        assert "invalid JSON" in str(exc_info.value)

    def test_negative_rate_rejected(self, tmp_path):
        path = tmp_path / "acm.json"
        path.write_text(json.dumps({"rates": {"allowances": {"meal_full": -5}}}))
        with pytest.raises(SnapshotLoadError):
            SnapshotService().load_file(str(path))

    def test_ambiguous_matrix_rejected(self):
        service = SnapshotService()
        matrix = service.baseline_document()["matrix"]
        with pytest.raises(SnapshotLoadError) as exc_info:
            service.build({"matrix": matrix + [dict(matrix[0], id="duplicate")]})
        assert "ambiguous" in str(exc_info.value)

    def test_incomplete_hour_table_rejected(self):
        service = SnapshotService()
        with pytest.raises(SnapshotLoadError):
            service.build({"rates": {"elearning": {"full_day_block_hours": 8}}})


class TestFetch:
    def patch_transport(self, monkeypatch, handler):
        real_client = httpx.AsyncClient

        def client_factory(**kwargs):
            return real_client(transport=httpx.MockTransport(handler), **kwargs)

        monkeypatch.setattr(httpx, "AsyncClient", client_factory)

    def test_fetch_document(self, monkeypatch):
        def handler(request):
            assert request.headers["Accept"] == "application/json"
            return httpx.Response(200, json={"rates": {"public_training": {"full_day": 1800}}})

        self.patch_transport(monkeypatch, handler)
        snapshot = asyncio.run(SnapshotService().fetch("https://acm.example/snapshot.json"))
        assert snapshot.rates.public_training.full_day == 1800

    def test_http_error_status(self, monkeypatch):
        self.patch_transport(monkeypatch, lambda request: httpx.Response(503, text="unavailable"))
        with pytest.raises(SnapshotLoadError) as exc_info:
            asyncio.run(SnapshotService().fetch("https://acm.example/snapshot.json"))
        assert "HTTP 503" in str(exc_info.value)

    def test_connection_error(self, monkeypatch):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        self.patch_transport(monkeypatch, handler)
        with pytest.raises(SnapshotLoadError):
            asyncio.run(SnapshotService().fetch("https://acm.example/snapshot.json"))


class TestPublishing:
    def test_publish_swaps_reference(self, baseline):
        store = SnapshotStore(baseline)
        captured = store.current()
        updated = baseline.model_copy(update={"version": baseline.version.model_copy(
            update={"acm_table_edition": "Next"}
        )})

        previous = store.publish(updated)

        assert previous is baseline
        assert captured.version.acm_table_edition == "November 2025"
        assert store.current().version.acm_table_edition == "Next"

    def test_current_defaults_to_baseline(self):
        service = SnapshotService()
        assert service.store.current() is None
        assert service.current().version.acm_table_edition == "November 2025"
        assert service.store.current() is not None

    def test_load_configured_falls_back_to_baseline(self, tmp_path):
        service = SnapshotService()
        snapshot = asyncio.run(service.load_configured(path=str(tmp_path / "missing.json"), url=""))
        assert snapshot.version.acm_table_edition == "November 2025"
        assert service.current() is snapshot

    def test_load_configured_prefers_file(self, tmp_path):
        path = tmp_path / "acm.json"
        path.write_text(json.dumps({"version": {"acm_table_edition": "From File"}}))
        service = SnapshotService()
        snapshot = asyncio.run(service.load_configured(path=str(path), url=""))
        assert snapshot.version.acm_table_edition == "From File"

    def test_overrides_without_changes_return_same_snapshot(self, baseline):
        assert baseline.with_overrides() is baseline
