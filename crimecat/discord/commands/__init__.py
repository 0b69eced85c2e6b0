"""
Command modules.

Each module declares at module level:
    name, execute(ctx, interaction)                       (required)
    description, aliases, permission_level, upload,
    options, prefix_execute(ctx, message, args), cacheable (optional)

MODULES is the load order. Add new modules here.
DISCORD_COMMANDS_ALLOW / DISCORD_COMMANDS_DENY filter by module name.
"""

from typing import Sequence

MODULES: Sequence[str] = (
    "core",        # ping
    "help",        # 도움말
    "music",       # 음악파일 (+ 파일명 autocomplete)
    "observer",    # 관전자
    "forget",      # 기록삭제
    "inquiry",     # 문의 (modal)
    "reply",       # 답장 (DM relay)
    "deploy",      # 배포
)

__all__ = ["MODULES"]
