"""Tests for the CI/CD config analyzer."""

from codeaudit_cli.cicd import analyze_cicd_config, detect_platform
from codeaudit_cli.results import CRITICAL, WARNING, CICDAnalysisResult

CLEAN_WORKFLOW = """name: CI
on:
  push:
    branches: [main]
jobs:
  test:
    runs-on: ubuntu-latest
    steps:
      - uses: actions/checkout@v4
      - uses: actions/cache@v4
      - run: npm test
"""

LEAKY_WORKFLOW = """name: Deploy
on: push
jobs:
  deploy:
    runs-on: ubuntu-latest
    steps:
      - run: echo $TOKEN
    env:
      password: "hunter22"
"""

GITLAB_CONFIG = """stages:
  - build
build:
  image: node:latest
  script:
    - npm ci
"""


class TestDetectPlatform:
    def test_github_actions(self):
        assert detect_platform(CLEAN_WORKFLOW) == "GitHub Actions"

    def test_gitlab(self):
        assert detect_platform(GITLAB_CONFIG) == "GitLab CI"

    def test_case_insensitive(self):
        assert detect_platform("STAGES:\n  - build") == "GitLab CI"

    def test_jenkins(self):
        assert detect_platform("pipeline {\n  agent any\n}") == "Jenkins"

    def test_azure(self):
        assert detect_platform("pool:\n  vmImage: ubuntu-20.04") == "Azure DevOps"

    def test_prose(self):
        assert detect_platform("The quick brown fox jumps over the lazy dog.") is None


class TestAnalyzeCICDConfig:
    def test_prose_is_not_detected(self):
        result = analyze_cicd_config("Meeting notes: ship the release on Friday.")
        assert result == CICDAnalysisResult()
        assert result.to_dict() == {
            "detected": False,
            "platform": None,
            "issues": [],
            "bestPractices": [],
            "securityScore": 100,
        }

    def test_clean_workflow(self):
        result = analyze_cicd_config(CLEAN_WORKFLOW)
        assert result.detected is True
        assert result.platform == "GitHub Actions"
        assert result.issues == ()
        implemented = {bp.name for bp in result.best_practices if bp.implemented}
        assert implemented == {"Dependency Caching", "Automated Testing", "Branch Rules"}
        assert result.security_score == 100

    def test_best_practices_order(self):
        names = [bp.name for bp in analyze_cicd_config(CLEAN_WORKFLOW).best_practices]
        assert names == [
            "Dependency Caching",
            "Parallel Execution",
            "Security Scanning",
            "Automated Testing",
            "Branch Rules",
            "Artifact Management",
        ]

    def test_leaky_workflow(self):
        result = analyze_cicd_config(LEAKY_WORKFLOW)
        assert [(i.severity, i.title) for i in result.issues] == [
            (CRITICAL, "Hardcoded Secrets in Pipeline"),
            (WARNING, "Potential Secret Exposure in Logs"),
            (WARNING, "Missing Checkout Step"),
        ]
        assert all(i.platform == "GitHub Actions" for i in result.issues)
        assert not any(bp.implemented for bp in result.best_practices)
        assert result.security_score == 55

    def test_masked_echo_is_fine(self):
        text = LEAKY_WORKFLOW + '      - run: echo "::add-mask::$TOKEN"\n'
        titles = [i.title for i in analyze_cicd_config(text).issues]
        assert "Potential Secret Exposure in Logs" not in titles

    def test_latest_tag(self):
        result = analyze_cicd_config(GITLAB_CONFIG)
        assert result.platform == "GitLab CI"
        assert [i.title for i in result.issues] == ['Using "latest" Tag for Dependencies']
        # "latest" also satisfies the testing check: 100 - 10 + 2/6 * 20
        assert result.security_score == 97

    def test_checkout_only_checked_for_github(self):
        titles = [i.title for i in analyze_cicd_config(GITLAB_CONFIG).issues]
        assert "Missing Checkout Step" not in titles

    def test_to_dict(self):
        d = analyze_cicd_config(LEAKY_WORKFLOW).to_dict()
        assert d["detected"] is True
        assert d["issues"][0]["type"] == "critical"
        assert d["issues"][0]["platform"] == "GitHub Actions"
        assert set(d["bestPractices"][0]) == {"name", "implemented", "description"}
