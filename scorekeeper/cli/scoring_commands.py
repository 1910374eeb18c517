"""
Score maintenance CLI commands

verify, rebuild, reset, stats
"""
import asyncio
import json

from scorekeeper.database import close_db, AsyncSessionLocal
from scorekeeper.services import admin_service, reporting_service


class ScoresCommand:
    """Score maintenance CLI command handler."""

    def __init__(self, dry_run: bool = False):
        self.dry_run = dry_run

    def execute(self, args) -> int:
        """Execute score command."""
        if args.scores_action == "verify":
            return self._verify(args)
        elif args.scores_action == "rebuild":
            return self._rebuild(args)
        elif args.scores_action == "reset":
            return self._reset(args)
        elif args.scores_action == "stats":
            return self._stats(args)
        else:
            print("Error: Unknown scores action")
            return 1

    def _run(self, operation):
        """Run one service call in a fresh session and dispose the engine."""
        async def runner():
            try:
                async with AsyncSessionLocal() as session:
                    return await operation(session)
            finally:
                await close_db()
        return asyncio.run(runner())

    def _verify(self, args) -> int:
        print("=== Point Integrity Verification ===")

        try:
            report = self._run(admin_service.verify_point_totals)
        except Exception as e:
            print(f"Verification failed: {e}")
            return 1

        print(f"Teams checked:        {report['teams_checked']}")
        print(f"Participants checked: {report['participants_checked']}")
        if report["consistent"]:
            print("All stored totals match the score log")
            return 0

        print(f"Mismatches: {len(report['mismatches'])}")
        for item in report["mismatches"]:
            print(
                f"  - {item['type']} {item['id']} ({item['name']}): "
                f"stored={item['stored']} expected={item['expected']}"
            )
        return 2

    def _rebuild(self, args) -> int:
        print("=== Rebuild Point Totals ===")

        if self.dry_run:
            print("[DRY RUN] Would overwrite stored totals with values from the score log")
            return 0

        try:
            result = self._run(admin_service.recalculate_point_totals)
        except Exception as e:
            print(f"Rebuild failed: {e}")
            return 1

        print(f"Corrected {len(result['corrected'])} totals")
        return 0

    def _reset(self, args) -> int:
        print("=== Reset Scores ===")

        if not args.yes:
            print("Refusing to reset without --yes (deletes every score entry and activity)")
            return 1

        if self.dry_run:
            print("[DRY RUN] Would delete all score entries and activities and zero all points")
            return 0

        try:
            result = self._run(admin_service.reset_scoring_state)
        except Exception as e:
            print(f"Reset failed: {e}")
            return 1

        print(f"Deleted {result['deleted_entries']} entries and {result['deleted_activities']} activities")
        return 0

    def _stats(self, args) -> int:
        try:
            stats = self._run(reporting_service.global_statistics)
        except Exception as e:
            print(f"Could not load statistics: {e}")
            return 1

        print(json.dumps(stats, indent=2, ensure_ascii=False))
        return 0
