from typing import Final


SKILL_FILENAME: Final[str] = "SKILL.md"
SKILLS_DIRNAME: Final[str] = "skills"

LOCK_DIRNAME: Final[str] = ".clawhub"
LOCK_FILENAME: Final[str] = "lock.json"

SCRATCH_PREFIX: Final[str] = ".tmp-dep-"

WORKSPACE_ENV_VAR: Final[str] = "OPENCLAW_WORKSPACE"
DEFAULT_WORKSPACE_PARTS: Final[tuple[str, ...]] = (".openclaw", "workspace")

CLAWHUB_EXECUTABLE: Final[str] = "clawhub"
GIT_EXECUTABLE: Final[str] = "git"
GITHUB_BASE_URL: Final[str] = "https://github.com"

REGISTRY_TIMEOUT_SECONDS: Final[int] = 60
CLONE_TIMEOUT_SECONDS: Final[int] = 30
CHECKOUT_TIMEOUT_SECONDS: Final[int] = 30
