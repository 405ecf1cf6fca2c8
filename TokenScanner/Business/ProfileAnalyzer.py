import logging
from typing import Optional

from TokenScanner.Business.RepoAnalyzer import RepoAnalyzer
from TokenScanner.Events.event_dispatcher import EventDispatcher
from TokenScanner.GitHub.GitHubClient import GitHubClient
from TokenScanner.Model.ProfileReport import ProfileReport
from TokenScanner.Tokenizer.TokenCounter import TokenCounter
from TokenScanner.Utility.errors import NO_REPOSITORIES_MESSAGE, describe_error, error_kind_for

logger = logging.getLogger(__name__)

DEFAULT_MIN_TOKENS = 1_000_000


class ProfileAnalyzer:

    """Analyses every non-fork repository of a user, one at a time.
    Emits events via `EventDispatcher` (analysis_started, repository_analyzed,
    repository_failed, analysis_completed).
    """
    def __init__(self, client: GitHubClient, counter: Optional[TokenCounter] = None,
                 repo_analyzer: Optional[RepoAnalyzer] = None, dispatcher: Optional[EventDispatcher] = None):
        self.client = client
        self.repo_analyzer = repo_analyzer or RepoAnalyzer(client, counter or TokenCounter())
        self.dispatcher = dispatcher or EventDispatcher()

    def analyze_profile(self, username: str, min_tokens: int = DEFAULT_MIN_TOKENS) -> ProfileReport:
        self.dispatcher.dispatch("analysis_started", username=username, min_tokens=min_tokens)
        try:
            report = self._run(username, min_tokens)
        except Exception as e:
            logger.warning("Analysis of %s failed: %s", username, e)
            report = ProfileReport.failed(username, min_tokens, describe_error(str(e)), error_kind_for(e))
        self.dispatcher.dispatch("analysis_completed", username=username, report=report)
        return report

    def _run(self, username: str, min_tokens: int) -> ProfileReport:
        repos = self.client.list_user_repos(username)
        if not repos:
            return ProfileReport.failed(username, min_tokens, NO_REPOSITORIES_MESSAGE, "no_data")

        report = ProfileReport(username=username, min_tokens_threshold=min_tokens)
        for repo in repos:
            try:
                analysis = self.repo_analyzer.build_analysis(repo, min_tokens)
            except Exception as e:
                logger.exception("Error analyzing repository %s: %s", repo.name, e)
                self.dispatcher.dispatch("repository_failed", repository=repo.name, error=str(e))
                continue
            report.add(analysis)
            logger.info("Analyzed %s: %d tokens", repo.name, analysis.total_tokens)
            self.dispatcher.dispatch("repository_analyzed", analysis=analysis)
        return report
