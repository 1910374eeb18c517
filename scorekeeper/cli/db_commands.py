"""
Database and roster CLI commands
"""
import asyncio

from scorekeeper.database import init_db, close_db, AsyncSessionLocal
from scorekeeper.services.admin_service import bootstrap_teams


class DbCommand:
    """Database CLI command handler."""

    def __init__(self, dry_run: bool = False):
        self.dry_run = dry_run

    def execute(self, args) -> int:
        """Execute database command."""
        if args.db_action == "init":
            return self._init(args)
        else:
            print("Error: Unknown database action")
            return 1

    def _init(self, args) -> int:
        """Create missing tables."""
        print("=== Database Initialization ===")

        if self.dry_run:
            print("[DRY RUN] Would create missing tables")
            return 0

        try:
            asyncio.run(self._async_init())
        except Exception as e:
            print(f"Initialization failed: {e}")
            return 1

        print("Tables created")
        return 0

    async def _async_init(self) -> None:
        try:
            await init_db()
        finally:
            await close_db()


class TeamsCommand:
    """Roster CLI command handler."""

    def __init__(self, dry_run: bool = False):
        self.dry_run = dry_run

    def execute(self, args) -> int:
        if args.teams_action == "init":
            return self._init(args)
        else:
            print("Error: Unknown teams action")
            return 1

    def _init(self, args) -> int:
        """Insert the default roster when no team exists."""
        print("=== Team Bootstrap ===")

        if self.dry_run:
            print("[DRY RUN] Would insert the default teams if none exist")
            return 0

        try:
            result = asyncio.run(self._async_init())
        except Exception as e:
            print(f"Team bootstrap failed: {e}")
            return 1

        print(result["message"])
        for team in result.get("teams", []):
            print(f"  - {team['name']} ({team['color']})")
        return 0

    async def _async_init(self) -> dict:
        try:
            await init_db()
            async with AsyncSessionLocal() as session:
                return await bootstrap_teams(session)
        finally:
            await close_db()
