from enum import Enum


class FileKind(str, Enum):
    """Closed set of configuration kinds a file can be classified as."""

    GHA_WORKFLOW = "gha-workflow"
    GHA_ACTION = "gha-action"
    GITHUB_FUNDING = "github-funding"
    DEPENDABOT_CONFIG = "dependabot-config"
    UNKNOWN = "unknown"
