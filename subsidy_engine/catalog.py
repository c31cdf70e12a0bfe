"""
Program catalog: the only place subsidy policy constants live
"""
import logging
from datetime import date
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Dict, List, Optional, Union

from pydantic import ValidationError

from .config import settings
from .models.program import (
    DemographicBands,
    ExclusivePair,
    Program,
    ProgramCatalogData,
    ProgramDefinition,
    ProgramParameters
)

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_RESOURCE = "catalog_2026.json"


class CatalogConfigurationError(ValueError):
    """Unknown program or malformed catalog data"""


class ProgramCatalog:
    """Lookup over a validated catalog document"""

    def __init__(self, data: ProgramCatalogData):
        self.data = data
        self._definitions: Dict[Program, ProgramDefinition] = {
            definition.program: definition for definition in data.programs
        }
        self._order: Dict[Program, int] = {
            definition.program: index for index, definition in enumerate(data.programs)
        }

    @classmethod
    def from_json(cls, text: Union[str, bytes]) -> "ProgramCatalog":
        try:
            data = ProgramCatalogData.model_validate_json(text)
        except ValidationError as e:
            raise CatalogConfigurationError(f"Malformed program catalog: {e}") from e
        return cls(data)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "ProgramCatalog":
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as e:
            raise CatalogConfigurationError(f"Cannot read program catalog {path}: {e}") from e
        return cls.from_json(text)

    @property
    def version(self) -> str:
        return self.data.version

    @property
    def demographics(self) -> DemographicBands:
        return self.data.demographics

    @property
    def programs(self) -> List[Program]:
        """Programs in declaration order"""
        return [definition.program for definition in self.data.programs]

    @property
    def exclusive_pairs(self) -> List[ExclusivePair]:
        return list(self.data.exclusive_pairs)

    def resolve_program(self, program: Union[Program, str]) -> Program:
        """Turn a program identifier into a Program, rejecting unknown identifiers"""
        try:
            resolved = Program(program)
        except ValueError as e:
            raise CatalogConfigurationError(f"Unknown program identifier: {program!r}") from e
        if resolved not in self._definitions:
            raise CatalogConfigurationError(f"Program {resolved.value} has no catalog entry")
        return resolved

    def definition(self, program: Union[Program, str]) -> ProgramDefinition:
        return self._definitions[self.resolve_program(program)]

    def declaration_index(self, program: Program) -> int:
        return self._order[self.resolve_program(program)]

    def get_program_parameters(self, program: Union[Program, str], as_of_date: date) -> ProgramParameters:
        """
        Resolve a program's parameters for a date

        Args:
            program: Program identifier
            as_of_date: Date the wage floor is resolved for. Rule evaluation
                passes the employee's hire date here, not the evaluation date.

        Returns:
            ProgramParameters with the wage floor in force on that date
        """
        definition = self.definition(program)
        return ProgramParameters(
            definition=definition,
            as_of=as_of_date,
            wage_floor=definition.wage_floor_on(as_of_date)
        )


def load_catalog(path: Optional[Union[str, Path]] = None) -> ProgramCatalog:
    """
    Load a catalog from a file, or the bundled catalog when no path is given
    """
    if path is not None:
        catalog = ProgramCatalog.from_file(path)
        source = str(path)
    else:
        text = resources.files("subsidy_engine.data").joinpath(DEFAULT_CATALOG_RESOURCE).read_text(encoding="utf-8")
        catalog = ProgramCatalog.from_json(text)
        source = DEFAULT_CATALOG_RESOURCE

    logger.info(f"Loaded program catalog version {catalog.version} from {source}")
    return catalog


@lru_cache(maxsize=1)
def get_catalog() -> ProgramCatalog:
    """Process-wide catalog, honouring settings.catalog_path"""
    return load_catalog(settings.catalog_path)


def get_program_parameters(program: Union[Program, str], as_of_date: date) -> ProgramParameters:
    return get_catalog().get_program_parameters(program, as_of_date)
