"""CI/CD pipeline config analysis.

Detects which CI platform a config text targets, flags a handful of
security problems, and checks for common pipeline best practices.
"""

from __future__ import annotations

import logging
import re

from .results import CRITICAL, WARNING, BestPractice, CICDAnalysisResult, CICDIssue, round_half_up

logger = logging.getLogger(__name__)

# First match wins, so order matters.
PLATFORM_DETECTORS = [
    ("GitHub Actions", r"name:\s*['\"]?[\w\s-]+['\"]?\s*\non:|uses:\s*actions/|runs-on:\s*ubuntu|\.github/workflows"),
    ("GitLab CI", r"stages:|\.gitlab-ci\.yml|gitlab-runner|script:|before_script:|after_script:"),
    ("Jenkins", r"pipeline\s*\{|Jenkinsfile|agent\s*\{|stages\s*\{|sh\s*['\"]|bat\s*['\"]"),
    ("CircleCI", r"version:\s*2|circleci|orbs:|executors:|\.circleci/config"),
    ("Travis CI", r"\.travis\.yml|travis_retry|travis_wait|language:\s*\w+"),
    ("Azure DevOps", r"azure-pipelines|trigger:|pool:|vmImage:|AzureDevOps"),
]

_SECRETS = r"password\s*[:=]\s*['\"][^'\"]+['\"]|api[_-]?key\s*[:=]\s*['\"][^'\"]+['\"]|secret\s*[:=]\s*['\"][^'\"]+['\"]"
_ECHO_VAR = r"echo\s*\$|print\s*\$"
_MASKED = r"::add-mask::|masked"
_LATEST_TAG = r"uses:\s*\S+@latest|image:\s*\S+:latest"
_CHECKOUT = r"actions/checkout"

# name -> (pattern, description when present, description when absent)
BEST_PRACTICES = [
    ("Dependency Caching", r"cache:|actions/cache|restore_cache|save_cache|cacheConfig",
     "Dependencies are cached for faster builds",
     "Enable caching to speed up builds by 50-80%"),
    ("Parallel Execution", r"parallel:|strategy:|matrix:|needs:|stages:",
     "Jobs run in parallel for faster pipelines",
     "Consider parallelizing independent jobs"),
    ("Security Scanning", r"codeql|snyk|trivy|dependabot|security.*scan|vulnerability",
     "Security scanning is configured",
     "Add security scanning (CodeQL, Snyk, Trivy)"),
    ("Automated Testing", r"test|jest|pytest|npm\s+test|yarn\s+test|go\s+test",
     "Tests run automatically in the pipeline",
     "Add automated tests to catch regressions"),
    ("Branch Rules", r"environment:|branches:|on:\s*\n\s*push:|pull_request:",
     "Pipeline has branch/environment rules",
     "Define branch triggers and protection rules"),
    ("Artifact Management", r"artifacts:|upload-artifact|download-artifact|store_artifacts",
     "Build artifacts are stored",
     "Store artifacts for debugging and deployment"),
]


def _has(pattern: str, text: str) -> bool:
    return re.search(pattern, text, re.IGNORECASE) is not None


def detect_platform(text: str) -> str | None:
    for name, pattern in PLATFORM_DETECTORS:
        if _has(pattern, text):
            return name
    return None


def _security_issues(text: str, platform: str) -> list[CICDIssue]:
    issues = []
    if _has(_SECRETS, text):
        issues.append(CICDIssue(
            CRITICAL,
            "Hardcoded Secrets in Pipeline",
            "Credentials are exposed in the CI/CD configuration. These can be extracted from repository history.",
            "Use secrets management: GitHub Secrets (${{ secrets.MY_SECRET }}), GitLab CI Variables, or Azure Key Vault.",
            platform,
        ))
    if _has(_ECHO_VAR, text) and not _has(_MASKED, text):
        issues.append(CICDIssue(
            WARNING,
            "Potential Secret Exposure in Logs",
            "Environment variables are echoed without masking, potentially exposing secrets in build logs.",
            'Use secret masking: echo "::add-mask::$SECRET" for GitHub Actions, or [[ -n "$SECRET" ]] && echo "***"',
            platform,
        ))
    if _has(_LATEST_TAG, text):
        issues.append(CICDIssue(
            WARNING,
            'Using "latest" Tag for Dependencies',
            'Using "latest" tags can cause unexpected build failures and security vulnerabilities.',
            "Pin versions: uses: actions/checkout@v4 or image: node:20.10.0 for reproducible builds.",
            platform,
        ))
    if platform == "GitHub Actions" and not _has(_CHECKOUT, text):
        issues.append(CICDIssue(
            WARNING,
            "Missing Checkout Step",
            "GitHub Actions workflow may not have a checkout step to fetch the code.",
            "Add: - uses: actions/checkout@v4 as the first step in your job.",
            platform,
        ))
    return issues


def security_score(issues: list[CICDIssue], practices: list[BestPractice]) -> int:
    critical = sum(1 for i in issues if i.severity == CRITICAL)
    warning = sum(1 for i in issues if i.severity == WARNING)
    implemented = sum(1 for bp in practices if bp.implemented)

    score = 100 - critical * 25 - warning * 10
    if practices:
        score += implemented / len(practices) * 20
    return round_half_up(max(0, min(100, score)))


def analyze_cicd_config(text: str) -> CICDAnalysisResult:
    """Analyze ``text`` as a CI/CD config.

    Text that matches no known platform returns the default result with
    ``detected`` False and nothing else evaluated.
    """
    platform = detect_platform(text)
    if platform is None:
        logger.debug("no CI/CD platform detected")
        return CICDAnalysisResult()

    issues = _security_issues(text, platform)
    practices = []
    for name, pattern, present, absent in BEST_PRACTICES:
        implemented = _has(pattern, text)
        practices.append(BestPractice(name, implemented, present if implemented else absent))

    score = security_score(issues, practices)
    logger.debug("CI/CD platform %s: %d issue(s), security score %d", platform, len(issues), score)

    return CICDAnalysisResult(
        detected=True,
        platform=platform,
        issues=tuple(issues),
        best_practices=tuple(practices),
        security_score=score,
    )
