"""
DrishtiAI Assist CLI
Main entry point for running the obstacle alert loop and voice commands.

Modes:
  [seconds]       Live session on wall-clock ticks
  --ticks N       Instant simulation on a fake clock
  --say TEXT      Match one voice command
  --interactive   Type voice commands at a prompt
  --validate      Check configuration validity
"""

import argparse
import logging
import signal
import sys
import time
from threading import Event as ThreadEvent

import questionary
from questionary import Style

from .config import (
    Config,
    ConfigValidationError,
    find_config_file,
    load_config,
    load_config_with_env,
    print_validation_result,
    read_config_file,
    validate_config_full,
)
from .core import DetectionFeedSimulator, NumpyRandomSource, clamp_sensitivity
from .models import AlertOutcome, Detection
from .outputs import Outputs, VoiceOutput, create_outputs
from .processor import AlertDispatcher, DetectionSession
from .utils import ManualScheduler, Scheduler, ThreadScheduler
from .vocabulary import get_vocabulary, resolve_locale
from .voice import VoiceIntentMatcher

logger = logging.getLogger(__name__)

DEFAULT_DURATION_SECONDS = 30.0

PROMPT_STYLE = Style(
    [
        ("qmark", "fg:cyan bold"),
        ("question", "bold"),
        ("answer", "fg:green"),
        ("instruction", "fg:gray"),
    ]
)

# Module-level shutdown signal for SIGTERM/SIGINT handling
_shutdown_signal = ThreadEvent()


def _handle_shutdown_signal(signum, _frame):
    """Handle SIGTERM/SIGINT for graceful shutdown."""
    signal_name = "SIGTERM" if signum == signal.SIGTERM else "SIGINT"
    # Note: print is safer than logger in signal handlers
    print(f"\nReceived {signal_name}, stopping session...")
    _shutdown_signal.set()


def _setup_signal_handlers():
    """Register signal handlers for graceful shutdown."""
    signal.signal(signal.SIGTERM, _handle_shutdown_signal)
    signal.signal(signal.SIGINT, _handle_shutdown_signal)


def setup_logging(quiet: bool = False) -> None:
    """
    Setup logging configuration.

    Args:
        quiet: If True, only show warnings and errors
    """
    level = logging.WARNING if quiet else logging.INFO

    # Custom formatter with shorter module names
    class ShortNameFormatter(logging.Formatter):
        def format(self, record):
            record.name = record.name.replace("drishti_assist.", "da.")
            return super().format(record)

    handler = logging.StreamHandler()
    handler.setFormatter(
        ShortNameFormatter(
            fmt="%(asctime)s %(name)s %(levelname)s %(message)s", datefmt="%H:%M:%S"
        )
    )
    logging.root.addHandler(handler)
    logging.root.setLevel(level)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="DrishtiAI Assist - obstacle alerts and voice commands",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m drishti_assist 60                  # Live session for one minute
  python -m drishti_assist --ticks 20 --seed 7 # Instant, repeatable simulation
  python -m drishti_assist --say "what time is it"
  python -m drishti_assist --interactive --locale hi
  python -m drishti_assist --validate

Environment Variables:
  DRISHTI_LOCALE, DRISHTI_SENSITIVITY, DRISHTI_MUTED - override config values
        """,
    )

    parser.add_argument(
        "duration",
        type=float,
        nargs="?",
        help=f"Live session duration in seconds (default: {DEFAULT_DURATION_SECONDS:g})",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Only show warnings and errors"
    )
    parser.add_argument("-c", "--config", help="Path to config file (default: search)")
    parser.add_argument(
        "--validate",
        action="store_true",
        help="Validate configuration and show derived settings",
    )
    parser.add_argument(
        "--ticks", type=int, metavar="N", help="Run N ticks instantly on a fake clock"
    )
    parser.add_argument("--seed", type=int, help="Random seed for repeatable runs")
    parser.add_argument("--say", metavar="TEXT", help="Match one voice command and exit")
    parser.add_argument(
        "--interactive", action="store_true", help="Prompt for voice commands"
    )
    parser.add_argument("--locale", help="Locale override (en, hi)")
    parser.add_argument("--sensitivity", type=float, help="Sensitivity override (0-1)")

    return parser.parse_args(argv)


def apply_cli_overrides(config: Config, args: argparse.Namespace) -> Config:
    """Apply command line overrides on top of the loaded config."""
    if args.locale is not None:
        config.speech.locale = resolve_locale(args.locale)
    if args.sensitivity is not None:
        config.session.sensitivity = clamp_sensitivity(args.sensitivity)
    if args.seed is not None:
        config.session.seed = args.seed
    return config


def build_session(
    config: Config, outputs: Outputs, voice: VoiceOutput, scheduler: Scheduler, on_update=None
) -> DetectionSession:
    """Wire simulator, dispatcher and scheduler from config."""
    simulator = DetectionFeedSimulator(
        random_source=NumpyRandomSource(config.session.seed),
        clock=scheduler.clock,
    )
    dispatcher = AlertDispatcher(
        voice=voice,
        haptics=outputs.haptics,
        cooldown_ms=config.alerts.cooldown_ms,
        muted=config.alerts.muted,
        haptic_enabled=config.alerts.haptic_enabled,
        clock=scheduler.clock,
    )
    return DetectionSession(
        simulator,
        dispatcher,
        scheduler,
        sensitivity=lambda: config.session.sensitivity,
        locale=lambda: config.speech.locale,
        tick_interval_ms=config.session.tick_interval_ms,
        on_update=on_update,
    )


def build_matcher(
    config: Config, outputs: Outputs, voice: VoiceOutput, scheduler: Scheduler
) -> VoiceIntentMatcher:
    return VoiceIntentMatcher(
        voice=voice,
        router=outputs.router,
        scheduler=scheduler,
        auto_activate_delay_ms=config.voice.auto_activate_delay_ms,
    )


def describe_tick(index: int, detections: list[Detection], outcome: AlertOutcome, locale: str) -> str:
    """One-line summary of a tick for console output."""
    vocab = get_vocabulary(locale)
    status = outcome.status.value if outcome.status else "clear"
    items = ", ".join(
        f"{vocab.label(d.category)} {d.distance_m:.1f}m" for d in detections[:3]
    )
    line = f"tick {index:3d}  {status:8s} {len(detections)} detection(s)"
    if items:
        line += f": {items}"
    if outcome.alert:
        line += f"  -> {outcome.alert.message}"
    return line


def print_banner(config: Config, mode: str) -> None:
    """Print startup banner."""
    print("\n" + "=" * 70)
    print("DRISHTI ASSIST")
    print("=" * 70)
    print(f"\nMode: {mode}")
    print(f"Locale: {config.speech.locale}")
    print(f"Sensitivity: {config.session.sensitivity:.2f}")
    print(f"Tick interval: {config.session.tick_interval_ms} ms")
    print(f"Alerts: {'muted' if config.alerts.muted else 'on'}")
    print("=" * 70)
    print()


def run_validate(config_path: str | None) -> None:
    """Run validation mode."""
    try:
        config_file = find_config_file(config_path)
        raw = read_config_file(config_file) if config_file else {}
    except ConfigValidationError as e:
        logger.error(str(e))
        sys.exit(1)

    result = validate_config_full(load_config_with_env(raw))
    print_validation_result(result)
    sys.exit(0 if result.valid else 1)


def run_ticks(config: Config, outputs: Outputs, voice: VoiceOutput, ticks: int) -> None:
    """Run a fixed number of ticks instantly on the manual scheduler."""
    scheduler = ManualScheduler()
    counter = {"tick": 0}

    def on_update(detections, outcome):
        counter["tick"] += 1
        print(describe_tick(counter["tick"], detections, outcome, config.speech.locale))

    session = build_session(config, outputs, voice, scheduler, on_update=on_update)
    handle = session.start()
    for _ in range(ticks):
        scheduler.advance(session.tick_interval_s)
    session.stop(handle)

    stats = session.stats
    print(
        f"\n{stats.ticks} ticks, {stats.total_detections_emitted} detections, "
        f"{stats.danger_alert_count} in danger range"
    )


def run_live(config: Config, outputs: Outputs, voice: VoiceOutput, duration: float) -> None:
    """Run a wall-clock session until the duration elapses or a signal arrives."""
    scheduler = ThreadScheduler()
    session = build_session(config, outputs, voice, scheduler)
    matcher = build_matcher(config, outputs, voice, scheduler)

    _setup_signal_handlers()
    if config.voice.auto_activate:
        matcher.auto_activate(config.speech.locale)

    handle = session.start()
    start_time = time.time()
    try:
        while not _shutdown_signal.is_set():
            remaining = duration - (time.time() - start_time)
            if remaining <= 0:
                break
            _shutdown_signal.wait(timeout=min(1.0, remaining))
    finally:
        session.stop(handle)
        matcher.stop()

    print(f"\nStatus at stop: {session.status_text()}")


def run_say(matcher: VoiceIntentMatcher, text: str, locale: str) -> int:
    result = matcher.match(text, locale)
    action = result.action.value if result.action else "-"
    print(f"matched={result.matched} action={action}")
    return 0 if result.matched else 2


def run_interactive(matcher: VoiceIntentMatcher, locale: str) -> None:
    """Prompt for utterances until an empty answer or Ctrl+C."""
    matcher.start_listening(locale)
    try:
        while True:
            text = questionary.text(
                "Voice command:",
                instruction="(empty to quit)",
                style=PROMPT_STYLE,
            ).ask()
            if not text:
                break
            result = matcher.match(text, locale)
            if result.matched:
                print(f"  -> {result.action.value}")
            else:
                print("  -> not understood")
    finally:
        matcher.stop()


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(args.quiet)

    if args.validate:
        run_validate(args.config)
        return

    try:
        config = load_config(args.config)
    except ConfigValidationError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)
    config = apply_cli_overrides(config, args)

    outputs = create_outputs(config.outputs.model_dump())
    voice = VoiceOutput(outputs.speech, rate=config.speech.voice_speed, pitch=config.speech.pitch)

    if args.say is not None:
        matcher = build_matcher(config, outputs, voice, ManualScheduler())
        sys.exit(run_say(matcher, args.say, config.speech.locale))

    if args.interactive:
        matcher = build_matcher(config, outputs, voice, ManualScheduler())
        run_interactive(matcher, config.speech.locale)
        return

    if args.ticks is not None:
        if args.ticks <= 0:
            logger.error(f"Invalid tick count '{args.ticks}' - must be positive")
            sys.exit(1)
        print_banner(config, f"{args.ticks} simulated ticks")
        run_ticks(config, outputs, voice, args.ticks)
        return

    duration = args.duration if args.duration is not None else DEFAULT_DURATION_SECONDS
    if duration <= 0:
        logger.error(f"Invalid duration '{duration}' - must be positive")
        sys.exit(1)
    print_banner(config, f"live for {duration:g} seconds")
    run_live(config, outputs, voice, duration)


if __name__ == "__main__":
    main()
