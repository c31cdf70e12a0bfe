"""
Mutual-exclusion resolution between programs that cannot pay for the same employee
"""
import logging
from typing import Dict, List, Sequence, Tuple

from ..catalog import ProgramCatalog
from ..models.program import Program
from ..models.reasons import describe_reason
from ..models.result import EligibilityResult, ExclusionRecord

logger = logging.getLogger(__name__)


def resolve_exclusions(
    results: Sequence[EligibilityResult],
    catalog: ProgramCatalog
) -> Tuple[List[EligibilityResult], List[ExclusionRecord]]:
    """
    Zero the lower-paying program of every exclusive pair that overlaps

    Args:
        results: Program results in requested order
        catalog: Catalog declaring the exclusive pairs

    Returns:
        (results in the same order with excluded programs zeroed,
        one ExclusionRecord per excluded program)
    """
    by_program: Dict[Program, EligibilityResult] = {r.program: r for r in results}
    excluded: Dict[Program, ExclusionRecord] = {}

    for pair in catalog.exclusive_pairs:
        first, second = (by_program.get(p) for p in pair.programs)
        if first is None or second is None:
            continue
        if first.program in excluded or second.program in excluded:
            continue
        if not (first.is_claimable and second.is_claimable):
            continue

        overlap = set(first.qualifying_employee_ids) & set(second.qualifying_employee_ids)
        if not overlap:
            continue

        winner, loser = _rank(first, second, catalog)
        excluded[loser.program] = ExclusionRecord(
            program=loser.program,
            excluded_by=winner.program,
            reason=pair.reason,
            overlapping_employee_ids=[i for i in loser.qualifying_employee_ids if i in overlap],
            forgone_amount=loser.total_amount
        )
        logger.info(
            f"{loser.program.value} excluded by {winner.program.value} "
            f"({len(overlap)} overlapping employee(s), {loser.total_amount} forgone)"
        )

    resolved = [
        _zeroed(r, excluded[r.program]) if r.program in excluded else r
        for r in results
    ]
    records = [excluded[r.program] for r in results if r.program in excluded]
    return resolved, records


def _zeroed(result: EligibilityResult, record: ExclusionRecord) -> EligibilityResult:
    return result.model_copy(update={
        "amount_per_person": 0,
        "incentive_per_person": 0,
        "total_amount": 0,
        "excluded_by": record.excluded_by,
        "reasons": result.reasons + [record.reason],
        "notes": result.notes + [
            f"{describe_reason(record.reason)}: {record.excluded_by.value}"
        ]
    })


def _rank(a: EligibilityResult, b: EligibilityResult, catalog: ProgramCatalog):
    """Larger total wins; ties go to the program declared first in the catalog"""
    if a.total_amount != b.total_amount:
        return (a, b) if a.total_amount > b.total_amount else (b, a)
    if catalog.declaration_index(a.program) < catalog.declaration_index(b.program):
        return a, b
    return b, a
