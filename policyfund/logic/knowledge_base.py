"""
Knowledge Base

Read-only table of institutions and policy-fund programs. Entries are
validated once at load time and stored as tuples of frozen models, so a
single instance can be shared across requests.
"""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Union

from pydantic import ValidationError

from .contracts import Institution, PolicyFundProgram
from .catalog import INSTITUTIONS, PROGRAMS

logger = logging.getLogger(__name__)


class KnowledgeBaseError(ValueError):
    """Raised when a catalog entry is structurally invalid."""


class KnowledgeBase:
    """
    Immutable catalog of fund programs with lookup by id, institution and track.
    """

    def __init__(
        self,
        programs: Iterable[PolicyFundProgram],
        institutions: Iterable[Institution] = ()
    ):
        self._institutions: Dict[str, Institution] = {}
        for institution in institutions:
            if institution.id in self._institutions:
                raise KnowledgeBaseError(f"Duplicate institution id: {institution.id}")
            self._institutions[institution.id] = institution

        self._programs = tuple(programs)
        self._by_id: Dict[str, PolicyFundProgram] = {}
        for program in self._programs:
            self._validate(program)
            self._by_id[program.id] = program

        logger.debug(
            "Knowledge base loaded: %d programs, %d institutions",
            len(self._programs), len(self._institutions),
        )

    def _validate(self, program: PolicyFundProgram) -> None:
        if program.id in self._by_id:
            raise KnowledgeBaseError(f"Duplicate program id: {program.id}")
        if self._institutions and program.institution_id not in self._institutions:
            raise KnowledgeBaseError(
                f"Program {program.id} references unknown institution {program.institution_id}"
            )
        if program.eligibility.is_empty():
            raise KnowledgeBaseError(f"Program {program.id} declares no eligibility criteria")
        if program.target_scale is not None and not program.target_scale:
            raise KnowledgeBaseError(f"Program {program.id} has an empty target scale")

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def __iter__(self) -> Iterator[PolicyFundProgram]:
        return iter(self._programs)

    def __len__(self) -> int:
        return len(self._programs)

    def __contains__(self, program_id: str) -> bool:
        return program_id in self._by_id

    @property
    def programs(self) -> List[PolicyFundProgram]:
        return list(self._programs)

    @property
    def institutions(self) -> List[Institution]:
        return list(self._institutions.values())

    def get(self, program_id: str) -> Optional[PolicyFundProgram]:
        return self._by_id.get(program_id)

    def get_institution(self, institution_id: str) -> Optional[Institution]:
        return self._institutions.get(institution_id)

    def by_institution(self, institution_id: str) -> List[PolicyFundProgram]:
        return [p for p in self._programs if p.institution_id == institution_id]

    def by_track(self, track: str) -> List[PolicyFundProgram]:
        return [p for p in self._programs if p.track == track]

    def agency_name(self, program: PolicyFundProgram) -> str:
        """Display name of the program's institution, falling back to its id."""
        institution = self._institutions.get(program.institution_id)
        return institution.name if institution else program.institution_id


# =============================================================================
# LOADERS
# =============================================================================

def load_knowledge_base(path: Union[str, Path]) -> KnowledgeBase:
    """
    Load a catalog from a JSON file.

    The file holds {"institutions": [...], "programs": [...]} using the same
    field names as the pydantic models.

    Args:
        path: Path to the JSON catalog

    Returns:
        KnowledgeBase

    Raises:
        KnowledgeBaseError: If the file is malformed or an entry is invalid
    """
    path = Path(path)
    try:
        with path.open(encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise KnowledgeBaseError(f"Cannot read catalog {path}: {e}") from e

    try:
        institutions = [Institution(**item) for item in data.get("institutions", [])]
        programs = [PolicyFundProgram(**item) for item in data.get("programs", [])]
    except (ValidationError, TypeError, AttributeError) as e:
        raise KnowledgeBaseError(f"Invalid catalog entry in {path}: {e}") from e

    logger.info("Loaded %d programs from %s", len(programs), path)
    return KnowledgeBase(programs, institutions)


@lru_cache(maxsize=1)
def load_default_knowledge_base() -> KnowledgeBase:
    """Built-in catalog, constructed once per process."""
    return KnowledgeBase(PROGRAMS, INSTITUTIONS)
