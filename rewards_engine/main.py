"""Main entry point for the rewards engine"""
import argparse
import asyncio
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from rewards_engine.config import validate_config, LOG_LEVEL
from rewards_engine.exceptions import RewardsEngineError
from rewards_engine.models.activity import ActivityEvent
from rewards_engine.services.container import init_container

# Configure logging
logging.basicConfig(
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    level=getattr(logging, LOG_LEVEL)
)

logger = logging.getLogger(__name__)


async def replay_events(service, events_path: Path) -> int:
    """
    Submit every record of a JSON Lines file

    Each line is {"activity_type": ..., "payload": {...}, "occurred_at": ...}.
    Blank lines are skipped; malformed lines are logged and skipped.

    Returns:
        Number of admitted activities
    """
    admitted = 0

    with events_path.open(encoding="utf-8") as f:
        for line_number, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue

            try:
                event = ActivityEvent.model_validate(json.loads(line))
            except ValueError as e:
                logger.warning(f"Skipping line {line_number}: {e}")
                continue

            result = await service.submit_activity(
                event.activity_type, event.payload, occurred_at=event.occurred_at
            )
            logger.info(
                f"[{line_number}] {event.activity_type.value}: {result.message} "
                f"(xp={result.xp_earned}, rewards={[r.id for r in result.new_rewards]})"
            )
            if result.success:
                admitted += 1

    return admitted


async def main(events_path: Optional[Path] = None) -> None:
    """Main application entry point"""
    scheduler = None
    try:
        # Validate configuration
        logger.info("Validating configuration...")
        validate_config()

        container = init_container(clock=datetime.now)
        service = container.rewards_service

        logger.info("Loading saved progress...")
        await service.initialize()

        if events_path is not None:
            logger.info(f"Replaying events from {events_path}...")
            admitted = await replay_events(service, events_path)
            progress = service.current_progress()
            logger.info(
                f"Replay complete: {admitted} admitted, level={progress.current_level.title}, "
                f"rewards={len(progress.unlocked_rewards)}"
            )
            await service.save()
            return

        scheduler = container.scheduler
        await scheduler.start()

        # Keep running until interrupted
        logger.info("Rewards engine is running. Press Ctrl+C to stop.")
        await asyncio.Event().wait()

    except KeyboardInterrupt:
        logger.info("Shutting down...")
    except RewardsEngineError as e:
        logger.error(f"Fatal engine error: {e.message}")
        raise
    finally:
        if scheduler:
            await scheduler.stop()
            await container.rewards_service.save()

        logger.info("Shutdown complete")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Activity rewards and streak engine")
    parser.add_argument(
        "--events",
        type=Path,
        default=None,
        help="JSON Lines file of activities to replay",
    )
    return parser.parse_args(argv)


if __name__ == "__main__":
    args = parse_args()
    asyncio.run(main(args.events))
