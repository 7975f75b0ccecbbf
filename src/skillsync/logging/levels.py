"""
HUMAN logging level -- Readable progress of sync operations.

Custom level between INFO (20) and WARNING (30). It does not indicate
severity: it marks the progress lines the operator is meant to read
(submodule added, skill synced, commits behind).

Hierarchy:
    debug  (10) -> git commands, working directories, stderr excerpts
    info   (20) -> System operations (config loaded, registry size)
    human  (25) -> * What the tool does: added, synced, behind
    warn   (30) -> Non-fatal problems
    error  (40) -> Errors
"""

import logging

import structlog

HUMAN = 25
logging.addLevelName(HUMAN, "HUMAN")


# structlog proxies .log(HUMAN, ...) to a method named after the level
def _human_method(self, message, *args, **kwargs):
    if self.isEnabledFor(HUMAN):
        self._log(HUMAN, message, args, **kwargs)


logging.Logger.human = _human_method

try:
    structlog.stdlib.LEVEL_TO_NAME[HUMAN] = "human"
    structlog.stdlib.NAME_TO_LEVEL["human"] = HUMAN
except AttributeError:
    pass
