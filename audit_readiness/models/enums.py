from enum import Enum, IntEnum


class ElementNumber(IntEnum):
    """The fourteen COR audit elements."""
    MANAGEMENT_SYSTEM = 1
    HAZARD_IDENTIFICATION = 2
    HAZARD_CONTROL = 3
    COMPETENCY_TRAINING = 4
    WORKPLACE_BEHAVIOR = 5
    PPE = 6
    PREVENTATIVE_MAINTENANCE = 7
    TRAINING_COMMUNICATION = 8
    WORKPLACE_INSPECTIONS = 9
    INCIDENT_INVESTIGATION = 10
    EMERGENCY_PREPAREDNESS = 11
    STATISTICS_RECORDS = 12
    REGULATORY_AWARENESS = 13
    MANAGEMENT_REVIEW = 14

class EvidenceKind(str, Enum):
    DOCUMENT = "document"
    FORM_SUBMISSION = "form_submission"
    TRAINING = "training"
    INTERVIEW = "interview"
    OBSERVATION = "observation"

class Frequency(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUAL = "annual"
    AS_NEEDED = "as_needed"

class Severity(str, Enum):
    CRITICAL = "critical"
    MAJOR = "major"
    MINOR = "minor"
    OBSERVATION = "observation"

class ScoreStatus(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    NEEDS_IMPROVEMENT = "needs_improvement"
    CRITICAL = "critical"

class SourceKind(str, Enum):
    FORMS = "forms"
    DOCUMENTS = "documents"
    MAINTENANCE = "maintenance"

class MatchStrategy(str, Enum):
    TAG = "tag"
    IDENTIFIER_PATTERN = "identifier_pattern"
    TYPE = "type"
    KEYWORD = "keyword"
    FULL_TEXT = "full_text"

class Timeframe(str, Enum):
    LAST_12_MONTHS = "last_12_months"
    LAST_6_MONTHS = "last_6_months"
    LAST_3_MONTHS = "last_3_months"
    CURRENT_QUARTER = "current_quarter"
    CURRENT_YEAR = "current_year"

class DocumentType(str, Enum):
    POLICY = "POL"
    PROCEDURE = "PRC"
    SAFE_WORK_PROCEDURE = "SWP"
    FORM = "FRM"
    TRAINING = "TRN"
    PLAN = "PLN"
    REPORT = "RPT"
    MINUTES = "MIN"
    CERTIFICATE = "CRT"
    MANUAL = "MAN"

class MilestoneStatus(str, Enum):
    COMPLETED = "completed"
    UPCOMING = "upcoming"

class ScoringProfileName(str, Enum):
    FORMS = "forms"
    DOCUMENTS = "documents"
    MAINTENANCE = "maintenance"

class ExportFormat(str, Enum):
    JSON = "json"
    CSV = "csv"
