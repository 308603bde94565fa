"""Procedure catalog - static reference content per procedure.

The table is built once at import and exposed read-only. Lookups by
ProcedureId cannot miss; free-form identifiers coming from outside
(HTTP, scripts) go through parse_procedure_id() first.
"""
import logging
from types import MappingProxyType
from typing import Mapping, Tuple, Union

from procsafe.shared.models import (
    ProcedureId,
    ProcedureInfo,
    Reference,
    UnknownProcedureError,
)

logger = logging.getLogger(__name__)


_ENTRIES: Tuple[ProcedureInfo, ...] = (
    ProcedureInfo(
        id=ProcedureId.IV_CANNULATION,
        name="Peripheral IV Cannulation",
        summary=(
            "Insert a peripheral intravenous cannula for fluids, medications, "
            "or blood sampling."
        ),
        contraindications=(
            "Cellulitis or burns at intended site",
            "Lymphoedema or post-mastectomy arm (avoid)",
            "Ipsilateral AV fistula (avoid)",
            "Severe coagulopathy (relative)",
        ),
        considerations=(
            "Consider ultrasound guidance if difficult access",
            "Use smallest gauge suitable for therapy",
            "Check allergies (latex, chlorhexidine)",
            "Aseptic non-touch technique (ANTT)",
        ),
        equipment=(
            "Gloves, apron",
            "Skin prep (chlorhexidine 2% in alcohol or povidone-iodine if allergic)",
            "Tourniquet",
            "Cannula (14–24G) + dressing",
            "Flush + saline",
            "Sharps bin",
        ),
        red_flags=(
            "Suspected sepsis with poor access — escalate for senior/IO",
            "Known lymphoedema/AV fistula — avoid that arm",
        ),
        references=(
            Reference(
                title="Australian Commission on Safety and Quality in Health Care: Peripheral IV",
                url="https://www.safetyandquality.gov.au/",
            ),
        ),
    ),
    ProcedureInfo(
        id=ProcedureId.VENEPUNCTURE,
        name="Venepuncture (Phlebotomy)",
        summary="Collect venous blood safely and aseptically.",
        contraindications=(
            "Same as IV access (cellulitis, AV fistula, lymphoedema)",
            "Severe coagulopathy (relative)",
        ),
        considerations=(
            "Check tests and required tubes",
            "Avoid IV infusing limb if possible",
            "Warm hand improves venous filling",
            "Check allergies (latex, chlorhexidine)",
        ),
        equipment=(
            "Gloves",
            "Skin prep",
            "Tourniquet",
            "Needle/vacutainer + tubes",
            "Gauze + dressing",
            "Sharps bin",
        ),
    ),
    ProcedureInfo(
        id=ProcedureId.URINARY_CATHETER,
        name="Urinary Catheterisation",
        summary=(
            "Insert urethral catheter for monitoring urine output or relieving "
            "retention."
        ),
        contraindications=(
            "Suspected urethral injury (blood at meatus, perineal ecchymosis)",
            "Pelvic fracture with high-riding prostate",
            "Urethral stricture (relative)",
        ),
        considerations=(
            "Use smallest appropriate catheter size",
            "Consider suprapubic if urethral injury suspected (senior help)",
            "Check allergies (latex)",
            "Aseptic technique — infection prevention",
        ),
        equipment=(
            "Sterile catheter kit (catheter, gloves, drape)",
            "Lubricant (lignocaine gel)",
            "Antiseptic",
            "Drainage bag",
        ),
        red_flags=(
            "Blood at meatus/pelvic trauma — do not insert; call urology",
            "Sepsis or obstructive uropathy — escalate",
        ),
    ),
    ProcedureInfo(
        id=ProcedureId.NG_TUBE,
        name="Nasogastric Tube Insertion",
        summary="Insert NG tube for decompression or feeding.",
        contraindications=(
            "Suspected basal skull or mid-face fracture",
            "Recent nasal surgery",
            "Esophageal varices (relative — senior input)",
            "Caustic ingestion (relative)",
        ),
        considerations=(
            "Check patency of nares",
            "Sit patient up if possible",
            "Confirm position (pH aspirate/X-ray as per local policy)",
            "Check coagulation if bleeding risk",
        ),
        equipment=(
            "NG tube appropriate size",
            "Lubricant",
            "pH paper",
            "Syringe",
            "Fixation device/tape",
        ),
        red_flags=(
            "Facial trauma/basal skull fracture — avoid nasal route",
            "Respiratory distress during insertion — stop",
        ),
    ),
    ProcedureInfo(
        id=ProcedureId.LUMBAR_PUNCTURE,
        name="Lumbar Puncture",
        summary="Obtain CSF for diagnostic purposes.",
        contraindications=(
            "Signs of raised intracranial pressure (papilloedema, focal neurology)",
            "Coagulopathy/anticoagulation",
            "Local infection at puncture site",
            "Spinal cord mass lesion (suspected)",
        ),
        considerations=(
            "Check coagulation, platelets",
            "Neuroimaging before LP if focal deficit/seizure/altered consciousness",
            "Positioning and analgesia/sedation considerations",
            "Consent and post-procedure advice",
        ),
        equipment=(
            "LP kit (spinal needle, manometer)",
            "Antiseptic, sterile drape",
            "Local anaesthetic",
            "CSF collection tubes",
        ),
        red_flags=(
            "Suspicion of space-occupying lesion — image first",
            "Anticoagulated patient — correct before LP",
        ),
    ),
)


def _build_catalog(entries: Tuple[ProcedureInfo, ...]) -> Mapping[ProcedureId, ProcedureInfo]:
    """Index entries by id, in ProcedureId declaration order.

    Raises:
        ValueError: If an id is duplicated or missing
    """
    by_id = {}
    for entry in entries:
        if entry.id in by_id:
            raise ValueError(f"Duplicate catalog entry for {entry.id.value}")
        by_id[entry.id] = entry

    missing = [pid.value for pid in ProcedureId if pid not in by_id]
    if missing:
        raise ValueError(f"Catalog missing entries for: {', '.join(missing)}")

    return MappingProxyType({pid: by_id[pid] for pid in ProcedureId})


CATALOG: Mapping[ProcedureId, ProcedureInfo] = _build_catalog(_ENTRIES)


def get_procedure(procedure_id: ProcedureId) -> ProcedureInfo:
    """Return the catalog entry for a procedure."""
    return CATALOG[procedure_id]


def list_procedures() -> Tuple[ProcedureInfo, ...]:
    """Return every catalog entry in stable display order."""
    return tuple(CATALOG.values())


def parse_procedure_id(value: Union[str, ProcedureId]) -> ProcedureId:
    """Validate a free-form procedure identifier at the boundary.

    Args:
        value: ProcedureId member or its string value, e.g. "ng_tube"

    Returns:
        Matching ProcedureId

    Raises:
        UnknownProcedureError: If value is not a supported procedure
    """
    if isinstance(value, ProcedureId):
        return value
    if isinstance(value, str):
        try:
            return ProcedureId(value.strip().lower())
        except ValueError:
            pass

    logger.warning(
        "PROCEDURE_NOT_FOUND",
        extra={"procedure": str(value)[:64]}
    )
    raise UnknownProcedureError(value)
