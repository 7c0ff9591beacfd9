"""Interactive terminal weather lookup."""
import argparse
import asyncio
import dataclasses
import logging
import os
import signal
import sys
import threading
from typing import List, Optional, TextIO

from openweather_provider import OpenWeatherProvider
from weather_config import WeatherConfig, load_config
from weather_provider import WeatherProviderBase
from weather_screen import ConsoleScreen, Screen
from weather_view import WeatherView

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
DEFAULT_LOG_FILE = os.path.join(BASE_DIR, "weather-view.log")
QUIT_WORDS = ("exit", "quit")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser("Current weather lookup")
    parser.add_argument("--log-file", default=DEFAULT_LOG_FILE)
    parser.add_argument("--location", help="Location to show on startup")
    parser.add_argument("--timeout", type=float, help="HTTP timeout in seconds")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def setup_logging(log_file: str, verbose: bool) -> None:
    # stdout carries the rendered view, so log lines go to stderr
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr),
            logging.FileHandler(log_file)
        ]
    )


def apply_overrides(config: WeatherConfig, args: argparse.Namespace) -> WeatherConfig:
    """Command-line flags win over environment configuration."""
    overrides = {}
    if args.location:
        overrides["default_query"] = args.location
    if args.timeout is not None:
        overrides["timeout"] = args.timeout
    if overrides:
        logging.info("Command-line overrides: %s", overrides)
    return dataclasses.replace(config, **overrides)


def start_input_reader(
    loop: asyncio.AbstractEventLoop,
    lines: "asyncio.Queue[Optional[str]]",
    stream: TextIO,
) -> threading.Thread:
    """
    Read lines from a blocking stream on a daemon thread.

    Each line is handed to the event loop through call_soon_threadsafe;
    None marks end of input.
    """
    def read_lines() -> None:
        try:
            for line in iter(stream.readline, ""):
                loop.call_soon_threadsafe(lines.put_nowait, line.rstrip("\r\n"))
            loop.call_soon_threadsafe(lines.put_nowait, None)
        except RuntimeError:
            # Event loop already closed; the session is over
            logging.debug("Input reader stopped after loop shutdown")

    thread = threading.Thread(target=read_lines, name="stdin-reader", daemon=True)
    thread.start()
    return thread


async def run_app(
    config: WeatherConfig,
    screen: Screen,
    stream: TextIO,
    provider: Optional[WeatherProviderBase] = None,
) -> None:
    """
    Run one interactive session until end of input or a quit word.

    Args:
        config: Resolved configuration
        screen: Where frames are drawn
        stream: Source of submitted lines (one submission per line)
        provider: Weather source; OpenWeather when omitted
    """
    loop = asyncio.get_running_loop()
    provider = provider or OpenWeatherProvider(config)
    lines: "asyncio.Queue[Optional[str]]" = asyncio.Queue()
    start_input_reader(loop, lines, stream)

    with WeatherView(provider, screen, config, loop) as view:
        while True:
            line = await lines.get()
            if line is None or line.strip().lower() in QUIT_WORDS:
                break
            view.submit(line)
    logging.info("Session ended")


def signal_handler(signum, frame):
    logging.info("Received signal %s, shutting down", signum)
    raise KeyboardInterrupt()


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    setup_logging(args.log_file, args.verbose)
    config = apply_overrides(load_config(), args)

    signal.signal(signal.SIGTERM, signal_handler)

    try:
        asyncio.run(run_app(config, ConsoleScreen(), sys.stdin))
    except KeyboardInterrupt:
        logging.info("Stopping weather view")


if __name__ == "__main__":
    main()
