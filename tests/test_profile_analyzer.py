import requests

from TokenScanner.Business.ProfileAnalyzer import ProfileAnalyzer
from TokenScanner.Events.event_dispatcher import EventDispatcher
from TokenScanner.GitHub.GitHubClient import GitHubClient
from TokenScanner.Tokenizer.TokenCounter import TokenCounter

API = "https://api.github.com"


class DummyRaw:
    def __init__(self, body):
        self.body = body

    def read1(self, amt, decode_content=True):
        data, self.body = self.body[:amt], self.body[amt:]
        return data


class DummyResponse:
    def __init__(self, status_code, json_data=None, text="", headers=None):
        self.status_code = status_code
        self._json = json_data
        self.text = text
        self.headers = headers or {}
        self.encoding = "utf-8"
        self.raw = DummyRaw(text.encode("utf-8"))

    def json(self):
        return self._json

    def close(self):
        pass


class DummySession:
    def __init__(self, responses):
        self.responses = responses
        self.headers = {}

    def get(self, url, params=None, timeout=None, stream=False):
        response = self.responses.get(url, DummyResponse(404))
        if isinstance(response, Exception):
            raise response
        return response


class WordEncoder:
    def encode(self, text, disallowed_special=()):
        return text.split()


def repo_json(name, fork=False):
    return {
        "name": name, "description": f"{name} repo", "language": "TypeScript",
        "stargazers_count": 2, "size": 4, "html_url": f"https://github.com/octocat/{name}",
        "fork": fork, "owner": {"login": "octocat"},
    }


def file_json(repo, path):
    return {"path": path, "type": "file", "size": 100,
            "download_url": f"https://raw.githubusercontent.com/octocat/{repo}/main/{path}"}


def make_analyzer(responses, dispatcher=None):
    client = GitHubClient(session=DummySession(responses))
    return ProfileAnalyzer(client, counter=TokenCounter(encoder=WordEncoder()), dispatcher=dispatcher)


def single_repo_responses(words):
    return {
        f"{API}/users/octocat/repos": DummyResponse(200, json_data=[repo_json("site")]),
        f"{API}/repos/octocat/site/contents/": DummyResponse(200, json_data=[file_json("site", "index.ts")]),
        "https://raw.githubusercontent.com/octocat/site/main/index.ts": DummyResponse(200, text=" ".join(["tok"] * words)),
    }


def test_single_small_repo_below_threshold():
    report = make_analyzer(single_repo_responses(50)).analyze_profile("octocat", 1_000_000)

    assert report.error is None
    assert report.total_repos_analyzed == 1
    stats = report.all_repo_stats["site"]
    assert stats.total_tokens == 50
    assert stats.meets_criteria is False
    assert stats.file_stats.extensions == {".ts": 50}
    assert report.repos_meeting_criteria == []


def test_repo_meeting_threshold_is_in_both_collections():
    report = make_analyzer(single_repo_responses(50)).analyze_profile("octocat", 50)
    assert [a.name for a in report.repos_meeting_criteria] == ["site"]
    assert report.repos_meeting_criteria[0] is report.all_repo_stats["site"]
    for analysis in report.repos_meeting_criteria:
        assert analysis.total_tokens >= report.min_tokens_threshold
    qualifying = [a for a in report.all_repo_stats.values() if a.total_tokens >= 50]
    assert qualifying == report.repos_meeting_criteria


def test_no_repositories():
    responses = {f"{API}/users/octocat/repos": DummyResponse(200, json_data=[])}
    report = make_analyzer(responses).analyze_profile("octocat")
    assert report.total_repos_analyzed == 0
    assert report.repos_meeting_criteria == []
    assert report.all_repo_stats == {}
    assert "No repositories found" in report.error
    assert report.error_kind == "no_data"
    assert report.min_tokens_threshold == 1_000_000


def test_only_forks_counts_as_no_repositories():
    responses = {f"{API}/users/octocat/repos": DummyResponse(200, json_data=[repo_json("f", fork=True)])}
    report = make_analyzer(responses).analyze_profile("octocat")
    assert report.error_kind == "no_data"


def test_user_not_found():
    report = make_analyzer({}).analyze_profile("ghost", 10)
    assert "not found" in report.error.lower()
    assert report.error_kind == "not_found"
    assert report.total_repos_analyzed == 0
    assert report.all_repo_stats == {}
    assert report.repos_meeting_criteria == []


def test_rate_limited():
    responses = {f"{API}/users/octocat/repos": DummyResponse(403)}
    report = make_analyzer(responses).analyze_profile("octocat")
    assert "rate limit" in report.error.lower()
    assert report.error_kind == "rate_limited"


def test_network_failure_on_listing():
    responses = {f"{API}/users/octocat/repos": requests.exceptions.ConnectionError("down")}
    report = make_analyzer(responses).analyze_profile("octocat")
    assert report.error_kind == "network"
    assert "network" in report.error.lower()


def test_fork_never_reported():
    responses = single_repo_responses(5)
    responses[f"{API}/users/octocat/repos"] = DummyResponse(200, json_data=[repo_json("site"), repo_json("copy", fork=True)])
    report = make_analyzer(responses).analyze_profile("octocat", 1)
    assert list(report.all_repo_stats) == ["site"]


def test_failing_repository_is_skipped():
    class ExplodingAnalyzer:
        def __init__(self, inner):
            self.inner = inner

        def build_analysis(self, repo, min_tokens):
            if repo.name == "bad":
                raise RuntimeError("boom")
            return self.inner.build_analysis(repo, min_tokens)

    responses = single_repo_responses(3)
    responses[f"{API}/users/octocat/repos"] = DummyResponse(200, json_data=[repo_json("bad"), repo_json("site")])
    profile = make_analyzer(responses)
    profile.repo_analyzer = ExplodingAnalyzer(profile.repo_analyzer)
    events = []
    profile.dispatcher.subscribe("repository_failed", lambda **kw: events.append(kw["repository"]))

    report = profile.analyze_profile("octocat", 1)
    assert report.error is None
    assert list(report.all_repo_stats) == ["site"]
    assert report.total_repos_analyzed == 1
    assert events == ["bad"]


def test_unreadable_repository_tree_yields_zero_tokens():
    responses = {
        f"{API}/users/octocat/repos": DummyResponse(200, json_data=[repo_json("empty")]),
        f"{API}/repos/octocat/empty/contents/": DummyResponse(404),
    }
    report = make_analyzer(responses).analyze_profile("octocat", 0)
    stats = report.all_repo_stats["empty"]
    assert stats.total_tokens == 0
    assert stats.file_stats.total_files == 0
    assert stats.meets_criteria is True


def test_events_are_emitted_in_order():
    dispatcher = EventDispatcher()
    seen = []
    for name in ("analysis_started", "repository_analyzed", "analysis_completed"):
        dispatcher.subscribe(name, lambda _name=name, **kw: seen.append(_name))
    make_analyzer(single_repo_responses(1), dispatcher=dispatcher).analyze_profile("octocat")
    assert seen == ["analysis_started", "repository_analyzed", "analysis_completed"]
