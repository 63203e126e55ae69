#!/usr/bin/env python3
"""
cube-timer: Speedcubing practice timer

Console entry point. The interactive timer itself is driven by a front end
feeding events into TimingStateMachine; this command covers the
non-interactive jobs around it:

    1. Print a fresh scramble
    2. Print headline statistics (PB, average, AO5/AO50/AO100)
    3. List logged solves, newest first
    4. Clear the solve history

Usage:
    # Stats from the default data directory
    cube-timer --stats

    # A 30-move scramble
    cube-timer --scramble 30

    # Use a specific config file
    cube-timer --config ~/.config/cube-timer/config.toml --history
"""

import argparse
import logging
import sys
from typing import Dict, Any, List, Optional

# Set up logging before imports that use it
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger('cube-timer')

from .config import TimerConfig, build_timer_config, load_config
from .errors import ConfigError, PersistenceWriteError, ValidationError
from .engine.timer_engine import TimingStateMachine, parse_scramble_length
from .stats.statistics import summarize
from .storage.preferences import Preferences, PreferencesStore
from .storage.solve_store import JsonFileSolveStore
from .timing.scramble import ScrambleGenerator, ScrambleRows, parse_scramble
from .timing.time_format import format_date, format_time


class CubeTimerApp:
    """
    Wires configuration to the stores and exposes the console actions.
    """

    def __init__(self, config: TimerConfig, generator: Optional[ScrambleGenerator] = None):
        self.config = config
        self.store = JsonFileSolveStore(config.history_path)
        self.preferences = PreferencesStore(
            config.preferences_path,
            defaults=Preferences(scramble_length=config.scramble_length)
        )
        self.generator = generator or ScrambleGenerator()

        logger.debug(f"Data dir: {config.data_dir}")

    def create_machine(self) -> TimingStateMachine:
        """State machine wired to this app's stores, for an interactive front end."""
        return TimingStateMachine(
            self.store,
            generator=self.generator,
            preferences=self.preferences,
            inspection_duration_ms=self.config.inspection_duration_ms
        )

    def scramble(self, length_text: str = "") -> str:
        """
        Generate a scramble as rows of 5 moves.

        Empty text uses the persisted preference.

        Raises:
            ValidationError: if length_text is not a non-negative integer
        """
        if length_text.strip():
            length = parse_scramble_length(length_text)
        else:
            length = self.preferences.load().scramble_length

        tokens = self.generator.generate(length)
        return "\n".join(" ".join(row) for row in ScrambleRows(tokens))

    def stats(self) -> str:
        summary = summarize(self.store.read_history())
        lines = [f"Solves: {summary.count}"]
        for label, value in summary.as_display().items():
            lines.append(f"{label + ':':<9}{value}")
        return "\n".join(lines)

    def history(self, verbose: bool = False) -> str:
        """List solves newest first; verbose adds each scramble in rows of 5."""
        history = self.store.read_history()
        if not history:
            return "No solves logged"

        lines = [f"{'DD/MM/YYYY':<12}Time"]
        for solve in reversed(history.solves):
            lines.append(f"{format_date(solve.timestamp):<12}{format_time(solve.solve_time_ms)}")
            if verbose:
                lines.extend(self._scramble_lines(solve.scramble))
        return "\n".join(lines)

    @staticmethod
    def _scramble_lines(text: str) -> List[str]:
        try:
            tokens = parse_scramble(text)
        except ValueError:
            logger.debug(f"Unparsable scramble in history: {text!r}")
            return [f"    {text}"] if text else []
        return ["    " + " ".join(row) for row in ScrambleRows(tokens)]

    def clear_history(self) -> str:
        count = len(self.store.read_history())
        self.store.clear()
        return f"Cleared {count} solves"


def main(argv=None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='cube-timer: Speedcubing practice timer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Headline statistics
    python -m cube_timer --stats

    # Scramble of the configured length
    python -m cube_timer --scramble

    # Wipe history (destructive)
    python -m cube_timer --clear-history --yes
        """
    )

    parser.add_argument(
        '--config', '-c',
        help='Path to TOML configuration file'
    )
    parser.add_argument(
        '--data-dir', '-d',
        help='Directory holding history and preferences (overrides config)'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )
    parser.add_argument(
        '--scramble',
        nargs='?',
        const='',
        metavar='LENGTH',
        help='Print a scramble (default length: saved preference)'
    )
    parser.add_argument(
        '--stats',
        action='store_true',
        help='Print PB, average and AO5/AO50/AO100 (default action)'
    )
    parser.add_argument(
        '--history',
        action='store_true',
        help='List logged solves, newest first'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='With --history, also print each solve\'s scramble'
    )
    parser.add_argument(
        '--clear-history',
        action='store_true',
        help='Delete all logged solves (requires --yes)'
    )
    parser.add_argument(
        '--yes',
        action='store_true',
        help='Confirm a destructive operation'
    )

    args = parser.parse_args(argv)

    try:
        config: Dict[str, Any] = load_config(args.config)
        timer_config = build_timer_config(config, data_dir=args.data_dir)
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        return 2

    level = logging.DEBUG if args.debug else getattr(logging, timer_config.log_level, logging.INFO)
    logging.getLogger().setLevel(level)

    app = CubeTimerApp(timer_config)

    try:
        if args.clear_history:
            if not args.yes:
                print("This is a destructive operation. Re-run with --yes to confirm.")
                return 1
            print(app.clear_history())
        elif args.scramble is not None:
            print(app.scramble(args.scramble))
        elif args.history:
            print(app.history(verbose=args.verbose))
        else:
            print(app.stats())
    except ValidationError as e:
        print(str(e), file=sys.stderr)
        return 2
    except PersistenceWriteError as e:
        logger.error(f"{e}")
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
