"""Canonical result shapes, one per task kind.

Each shape is a tree of schema nodes (Str / Num / Bool / ListOf / Obj).
The tree is the single source of truth for what a caller may read from
an AnalysisResult: the normalizer fills in every declared field.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from resume_insights.models.task import TaskKind


@dataclass(frozen=True)
class Str:
    default: str = ""


@dataclass(frozen=True)
class Num:
    default: int = 0


@dataclass(frozen=True)
class Bool:
    default: bool = False


@dataclass(frozen=True)
class ListOf:
    item: "SchemaNode"


@dataclass(frozen=True)
class Obj:
    fields: dict[str, "SchemaNode"] = field(default_factory=dict)


SchemaNode = Union[Str, Num, Bool, ListOf, Obj]

STR = Str()
NUM = Num()
BOOL = Bool()
STR_LIST = ListOf(STR)


RESUME_PARSE_SCHEMA = Obj({
    "personalInfo": Obj({
        "phone": STR,
        "location": STR,
        "socialLinks": Obj({
            "linkedin": STR,
            "github": STR,
            "portfolio": STR,
        }),
    }),
    "professional": Obj({
        "title": STR,
        "summary": STR,
        "skills": STR_LIST,
    }),
    "experience": ListOf(Obj({
        "title": STR,
        "company": STR,
        "location": STR,
        "startDate": STR,
        "endDate": STR,
        "current": BOOL,
        "description": STR,
    })),
    "education": ListOf(Obj({
        "degree": STR,
        "school": STR,
        "location": STR,
        "startDate": STR,
        "endDate": STR,
        "gpa": STR,
        "relevantCoursework": STR_LIST,
    })),
    "projects": ListOf(Obj({
        "title": STR,
        "description": STR,
        "technologies": STR_LIST,
        "githubUrl": STR,
        "liveUrl": STR,
        "highlights": STR_LIST,
    })),
    "certifications": ListOf(Obj({
        "name": STR,
        "issuer": STR,
        "date": STR,
        "credentialId": STR,
        "url": STR,
    })),
})

RESUME_TIPS_SCHEMA = Obj({
    "tips": ListOf(Obj({
        "category": STR,
        "suggestion": STR,
        "priority": STR,
        "explanation": STR,
    })),
    "overallScore": NUM,
    "summary": STR,
})

JOB_MATCHING_SCHEMA = Obj({
    "overallMatch": NUM,
    "skillsMatch": Obj({
        "score": NUM,
        "matchedSkills": STR_LIST,
        "missingSkills": STR_LIST,
        "partialMatches": STR_LIST,
    }),
    "experienceMatch": Obj({
        "score": NUM,
        "relevantExperience": STR,
        "levelMatch": STR,
        "gaps": STR_LIST,
    }),
    "recommendations": STR_LIST,
    "strengths": STR_LIST,
    "weaknesses": STR_LIST,
})

SUCCESS_PREDICTION_SCHEMA = Obj({
    "successScore": NUM,
    "confidence": STR,
    "factors": Obj({
        "skillsAlignment": NUM,
        "experienceLevel": NUM,
        "industryFit": NUM,
        "roleMatch": NUM,
        "educationFit": NUM,
        "locationMatch": NUM,
    }),
    "insights": STR_LIST,
    "improvementAreas": STR_LIST,
    "competitiveAdvantages": STR_LIST,
})

JOB_DESCRIPTION_SCHEMA = Obj({
    "requiredSkills": STR_LIST,
    "preferredSkills": STR_LIST,
    "experienceLevel": STR,
    "industryType": STR,
    "roleType": STR,
    "keyResponsibilities": STR_LIST,
    "qualifications": STR_LIST,
    "difficulty": STR,
    "competitiveLevel": STR,
})

TASK_SCHEMAS: dict[TaskKind, Obj] = {
    TaskKind.RESUME_PARSE: RESUME_PARSE_SCHEMA,
    TaskKind.RESUME_TIPS: RESUME_TIPS_SCHEMA,
    TaskKind.JOB_MATCHING: JOB_MATCHING_SCHEMA,
    TaskKind.SUCCESS_PREDICTION: SUCCESS_PREDICTION_SCHEMA,
    TaskKind.JOB_DESCRIPTION_ANALYSIS: JOB_DESCRIPTION_SCHEMA,
}
