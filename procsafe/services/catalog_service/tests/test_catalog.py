"""Tests for the procedure catalog."""
import pytest

from procsafe.shared.models import ProcedureId, ProcedureInfo, UnknownProcedureError
from procsafe.services.catalog_service.catalog import (
    CATALOG,
    get_procedure,
    list_procedures,
    parse_procedure_id,
)


class TestGetProcedure:
    """Tests for lookups by ProcedureId."""

    @pytest.mark.parametrize("procedure", list(ProcedureId))
    def test_every_id_resolves(self, procedure):
        """Lookup is total over the enum."""
        info = get_procedure(procedure)
        assert isinstance(info, ProcedureInfo)
        assert info.id == procedure
        assert info.name
        assert info.summary
        assert info.contraindications
        assert info.considerations
        assert info.equipment

    def test_lumbar_puncture_content(self):
        info = get_procedure(ProcedureId.LUMBAR_PUNCTURE)
        assert info.name == "Lumbar Puncture"
        assert "Coagulopathy/anticoagulation" in info.contraindications
        assert "Suspicion of space-occupying lesion — image first" in info.red_flags

    def test_optional_fields_default_empty(self):
        info = get_procedure(ProcedureId.VENEPUNCTURE)
        assert info.red_flags == ()
        assert info.references == ()

    def test_only_iv_cannulation_has_references(self):
        with_refs = [info.id for info in list_procedures() if info.references]
        assert with_refs == [ProcedureId.IV_CANNULATION]


class TestListProcedures:
    """Tests for the ordered selector list."""

    def test_fixed_order(self):
        assert [info.id for info in list_procedures()] == [
            ProcedureId.IV_CANNULATION,
            ProcedureId.VENEPUNCTURE,
            ProcedureId.URINARY_CATHETER,
            ProcedureId.NG_TUBE,
            ProcedureId.LUMBAR_PUNCTURE,
        ]

    def test_stable_across_calls(self):
        assert list_procedures() == list_procedures()

    def test_one_entry_per_procedure(self):
        assert len(list_procedures()) == len(ProcedureId) == 5


class TestImmutability:
    """The catalog has no mutation API."""

    def test_catalog_mapping_is_read_only(self):
        with pytest.raises(TypeError):
            CATALOG[ProcedureId.NG_TUBE] = get_procedure(ProcedureId.VENEPUNCTURE)

    def test_entries_are_frozen(self):
        info = get_procedure(ProcedureId.NG_TUBE)
        with pytest.raises(AttributeError):
            info.name = "Changed"

    def test_entry_lists_are_tuples(self):
        info = get_procedure(ProcedureId.NG_TUBE)
        assert isinstance(info.contraindications, tuple)
        assert isinstance(info.equipment, tuple)


class TestParseProcedureId:
    """Tests for boundary validation of free-form ids."""

    @pytest.mark.parametrize("value", ["ng_tube", "NG_TUBE", "  ng_tube\n"])
    def test_valid_strings(self, value):
        assert parse_procedure_id(value) == ProcedureId.NG_TUBE

    def test_enum_member_passes_through(self):
        assert parse_procedure_id(ProcedureId.VENEPUNCTURE) is ProcedureId.VENEPUNCTURE

    @pytest.mark.parametrize("value", ["", "chest_drain", "ng tube", None, 3])
    def test_unknown_values_rejected(self, value):
        with pytest.raises(UnknownProcedureError) as exc_info:
            parse_procedure_id(value)
        assert exc_info.value.value == value

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_procedure_id("appendicectomy")


class TestToDict:
    """Tests for API serialization of catalog entries."""

    def test_iv_cannulation_to_dict(self):
        data = get_procedure(ProcedureId.IV_CANNULATION).to_dict()

        assert data["id"] == "iv_cannulation"
        assert data["equipment"][0] == "Gloves, apron"
        assert data["red_flags"] == [
            "Suspected sepsis with poor access — escalate for senior/IO",
            "Known lymphoedema/AV fistula — avoid that arm",
        ]
        assert data["references"] == [{
            "title": "Australian Commission on Safety and Quality in Health Care: Peripheral IV",
            "url": "https://www.safetyandquality.gov.au/",
        }]
