"""
Models package for the Employment Subsidy Eligibility Engine
"""

from .reasons import (
    Requirement,
    ReasonCode,
    REASON_LABELS,
    REQUIREMENT_LABELS,
    describe_reason,
    describe_reasons
)

from .company import (
    Region,
    NonCapitalTier,
    WorkType,
    CompanyProfile,
    Employee,
    EmployeeFacts
)

from .program import (
    Program,
    ProgramBasis,
    PaymentPeriod,
    WageThreshold,
    RosterBand,
    SupportCap,
    ApplicationInfo,
    ProgramDefinition,
    ProgramParameters,
    ExclusivePair,
    DemographicBands,
    ProgramCatalogData
)

from .result import (
    Eligibility,
    RequirementCheck,
    AmountBreakdown,
    EligibilityResult,
    ExclusionRecord,
    EmployeeStatus,
    EmployeeCheck,
    MatrixCell,
    EmployeeMatrixRow,
    ApplicationChecklistItem,
    WarningSeverity,
    DataQualityWarning,
    ReportAggregate,
    MonthlyEligibility,
    EmployeeTurning60,
    SeniorTimingRecommendation
)

from .extraction import (
    WageLedgerEntry,
    InsuranceListEntry,
    EmploymentContractEntry,
    RosterBuildResult
)

__all__ = [
    # Reason codes
    "Requirement",
    "ReasonCode",
    "REASON_LABELS",
    "REQUIREMENT_LABELS",
    "describe_reason",
    "describe_reasons",

    # Company models
    "Region",
    "NonCapitalTier",
    "WorkType",
    "CompanyProfile",
    "Employee",
    "EmployeeFacts",

    # Program models
    "Program",
    "ProgramBasis",
    "PaymentPeriod",
    "WageThreshold",
    "RosterBand",
    "SupportCap",
    "ApplicationInfo",
    "ProgramDefinition",
    "ProgramParameters",
    "ExclusivePair",
    "DemographicBands",
    "ProgramCatalogData",

    # Result models
    "Eligibility",
    "RequirementCheck",
    "AmountBreakdown",
    "EligibilityResult",
    "ExclusionRecord",
    "EmployeeStatus",
    "EmployeeCheck",
    "MatrixCell",
    "EmployeeMatrixRow",
    "ApplicationChecklistItem",
    "WarningSeverity",
    "DataQualityWarning",
    "ReportAggregate",
    "MonthlyEligibility",
    "EmployeeTurning60",
    "SeniorTimingRecommendation",

    # Extraction models
    "WageLedgerEntry",
    "InsuranceListEntry",
    "EmploymentContractEntry",
    "RosterBuildResult"
]
