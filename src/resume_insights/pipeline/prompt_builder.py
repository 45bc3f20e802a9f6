"""Prompt templates and generation settings, one per task kind."""

from __future__ import annotations

from types import MappingProxyType

from resume_insights.clients.gemini_client import GenerationSettings
from resume_insights.models.request import JobContext
from resume_insights.models.task import TaskKind

RESUME_PARSE_PROMPT = """\
You are a professional resume parser. Extract information from the provided resume and return ONLY a valid JSON object with the following exact structure. Do not include any additional text, explanations, or markdown formatting.

Return the data in this exact format:
{
  "personalInfo": {
    "phone": "",
    "location": "",
    "socialLinks": {"linkedin": "", "github": "", "portfolio": ""}
  },
  "professional": {"title": "", "summary": "", "skills": []},
  "experience": [
    {"title": "", "company": "", "location": "", "startDate": "YYYY-MM", "endDate": "YYYY-MM", "current": false, "description": ""}
  ],
  "education": [
    {"degree": "", "school": "", "location": "", "startDate": "YYYY-MM", "endDate": "YYYY-MM", "gpa": "", "relevantCoursework": []}
  ],
  "projects": [
    {"title": "", "description": "", "technologies": [], "githubUrl": "", "liveUrl": "", "highlights": []}
  ],
  "certifications": [
    {"name": "", "issuer": "", "date": "YYYY-MM", "credentialId": "", "url": ""}
  ]
}

Important parsing rules:
1. Extract phone numbers, email addresses, and location information
2. Find LinkedIn, GitHub, and portfolio URLs in social links
3. Identify the main professional title/role
4. Extract professional summary or objective
5. List all technical skills, tools, and technologies
6. Parse work experience with dates in YYYY-MM format
7. Extract education details including GPA if mentioned
8. Identify projects with technologies used
9. Find certifications and their details
10. If information is not available, leave the field empty (empty string for strings, empty array for arrays, false for booleans)
11. For current positions, set "current": true and "endDate": ""
12. Return ONLY the JSON object, no other text"""

RESUME_TIPS_PROMPT = """\
You are an expert resume optimization consultant. Analyze the provided resume against the specific job description and provide actionable improvement suggestions.

Return ONLY a valid JSON object with this exact structure:
{
  "tips": [
    {
      "category": "skills|experience|keywords|format|content",
      "suggestion": "specific actionable tip",
      "priority": "high|medium|low",
      "explanation": "why this improvement matters for this specific job"
    }
  ],
  "overallScore": 85,
  "summary": "brief summary of resume strengths and areas for improvement"
}

Focus on:
1. Missing keywords from job description
2. Skills alignment with job requirements
3. Experience relevance and presentation
4. Resume format and structure improvements
5. Quantifiable achievements suggestions
6. ATS optimization tips

Provide 5-8 specific, actionable tips. Return ONLY the JSON object."""

JOB_MATCHING_PROMPT = """\
You are a job matching expert. Analyze how well the candidate's resume aligns with the job requirements.

Return ONLY a valid JSON object with this exact structure:
{
  "overallMatch": 78,
  "skillsMatch": {
    "score": 75,
    "matchedSkills": ["React", "JavaScript"],
    "missingSkills": ["TypeScript", "Docker"],
    "partialMatches": ["Frontend Development"]
  },
  "experienceMatch": {
    "score": 80,
    "relevantExperience": "3 years in frontend development",
    "levelMatch": "good",
    "gaps": ["No backend experience"]
  },
  "recommendations": ["Consider learning TypeScript to improve technical fit"],
  "strengths": ["Strong React background"],
  "weaknesses": ["Missing backend skills"]
}

Analyze technical skills, experience level, industry fit, and role requirements. Return ONLY the JSON object."""

SUCCESS_PREDICTION_PROMPT = """\
You are a recruitment success prediction expert. Analyze the probability of application success based on resume-job fit.

Return ONLY a valid JSON object with this exact structure:
{
  "successScore": 72,
  "confidence": "low|medium|high",
  "factors": {
    "skillsAlignment": 78,
    "experienceLevel": 85,
    "industryFit": 60,
    "roleMatch": 70,
    "educationFit": 80,
    "locationMatch": 90
  },
  "insights": ["Your technical skills align well with the requirements"],
  "improvementAreas": ["Highlight more industry-specific achievements"],
  "competitiveAdvantages": ["Strong technical foundation"]
}

Consider market competitiveness, role requirements, and candidate fit. Return ONLY the JSON object."""

JOB_DESCRIPTION_PROMPT = """\
Analyze this job posting and extract key information for candidate matching.

Return ONLY a valid JSON object with this exact structure:
{
  "requiredSkills": ["skill1", "skill2"],
  "preferredSkills": ["skill1", "skill2"],
  "experienceLevel": "entry|mid|senior|lead",
  "industryType": "tech|finance|healthcare|etc",
  "roleType": "frontend|backend|fullstack|mobile|devops|etc",
  "keyResponsibilities": ["responsibility1", "responsibility2"],
  "qualifications": ["qualification1", "qualification2"],
  "difficulty": "low|medium|high",
  "competitiveLevel": "low|medium|high"
}

Extract and categorize the requirements accurately. Return ONLY the JSON object."""

TEMPLATES = MappingProxyType({
    TaskKind.RESUME_PARSE: RESUME_PARSE_PROMPT,
    TaskKind.RESUME_TIPS: RESUME_TIPS_PROMPT,
    TaskKind.JOB_MATCHING: JOB_MATCHING_PROMPT,
    TaskKind.SUCCESS_PREDICTION: SUCCESS_PREDICTION_PROMPT,
    TaskKind.JOB_DESCRIPTION_ANALYSIS: JOB_DESCRIPTION_PROMPT,
})

_INSIGHTS = GenerationSettings(temperature=0.3)

GENERATION_SETTINGS = MappingProxyType({
    TaskKind.RESUME_PARSE: GenerationSettings(temperature=0.1),
    TaskKind.RESUME_TIPS: _INSIGHTS,
    TaskKind.JOB_MATCHING: _INSIGHTS,
    TaskKind.SUCCESS_PREDICTION: _INSIGHTS,
    TaskKind.JOB_DESCRIPTION_ANALYSIS: GenerationSettings(
        temperature=0.1, max_output_tokens=2048, safety_threshold=None,
    ),
})


def build_prompt(task: TaskKind, document_text: str | None, job: JobContext | None) -> str:
    """Assemble job fields, resume text and the task template, in that order.

    Pure and deterministic.
    """
    sections: list[str] = []

    if job is not None:
        lines = [
            "JOB DETAILS:",
            f"Title: {job.title}",
            f"Company: {job.company}",
        ]
        if task is not TaskKind.JOB_DESCRIPTION_ANALYSIS:
            lines.append(f"Location: {job.location or 'Not specified'}")
        lines.append(f"Description: {job.description or ''}")
        sections.append("\n".join(lines))

    if document_text is not None:
        sections.append(f"RESUME CONTENT:\n{document_text}")

    sections.append(TEMPLATES[task])
    return "\n\n".join(sections)


def generation_for(task: TaskKind) -> GenerationSettings:
    return GENERATION_SETTINGS[task]
