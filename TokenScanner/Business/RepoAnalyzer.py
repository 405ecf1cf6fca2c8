"""
Module to download a repository's text/code files and total their tokens.
"""
import logging

from TokenScanner.Business.TreeWalker import TreeWalker
from TokenScanner.GitHub.GitHubClient import GitHubClient
from TokenScanner.Model.RepoAnalysis import FileStats, RepoAnalysis, RepoTokenTotals
from TokenScanner.Model.Repository import Repository
from TokenScanner.Tokenizer.TokenCounter import TokenCounter

logger = logging.getLogger(__name__)

MAX_PROCESSED_FILES = 200
MAX_FILE_SIZE = 10 * 1024 * 1024

CODE_EXTENSIONS = frozenset({
    ".py", ".js", ".jsx", ".ts", ".tsx", ".java", ".cpp", ".c", ".h", ".hpp",
    ".cs", ".php", ".rb", ".go", ".rs", ".swift", ".kt", ".scala", ".sh",
    ".sql", ".html", ".css", ".scss", ".less", ".xml", ".json", ".yaml", ".yml",
    ".md", ".txt", ".r", ".m", ".pl", ".lua", ".dart", ".elm", ".ex", ".exs",
})


class RepoAnalyzer:
    def __init__(self, client: GitHubClient, counter: TokenCounter, walker: TreeWalker = None):
        self.client = client
        self.counter = counter
        self.walker = walker or TreeWalker(client)

    def analyze(self, repo: Repository) -> RepoTokenTotals:
        files = self.walker.walk(repo.owner, repo.name)
        stats = FileStats(total_files=len(files))
        total_tokens = 0

        for entry in files:
            if stats.processed_files >= MAX_PROCESSED_FILES:
                logger.info("Stopping analysis for %s - processed %d files", repo.name, MAX_PROCESSED_FILES)
                break
            extension = entry.extension
            if extension not in CODE_EXTENSIONS or entry.size > MAX_FILE_SIZE:
                continue
            if not entry.download_url:
                continue

            download = self.client.download_file(entry.download_url)
            if not download.ok:
                logger.debug("Download failed for %s/%s: %s", repo.name, entry.path, download.error)
                stats.failed_files += 1
                continue
            content = download.value_or("")
            if not content:
                continue

            tokens = self.counter.count(content)
            total_tokens += tokens
            stats.record(extension, tokens)

        return RepoTokenTotals(total_tokens=total_tokens, file_stats=stats)

    def build_analysis(self, repo: Repository, min_tokens: int) -> RepoAnalysis:
        totals = self.analyze(repo)
        return RepoAnalysis(
            name=repo.name,
            description=repo.description,
            language=repo.language,
            stars=repo.stars,
            size_kb=repo.size_kb,
            total_tokens=totals.total_tokens,
            file_stats=totals.file_stats,
            url=repo.html_url,
            meets_criteria=totals.total_tokens >= min_tokens,
        )
