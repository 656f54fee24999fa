"""Named developer workflows as step lists.

Each function returns the full, ordered list of steps for one workflow.
Every command line and URL is fixed.
"""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path

from fyre.services.pipeline import IfExists, InDirectory, Notice, RemoveFile, Step, run

__all__ = [
    "APP_STORE_CONNECT_URL",
    "IOS_DIR",
    "PLAY_CONSOLE_URL",
    "GenerateKind",
    "clean_steps",
    "fix_steps",
    "generate_steps",
    "release_lane",
    "release_steps",
    "service_url",
    "watch_steps",
]

IOS_DIR = Path("ios")
PODFILE = Path("Podfile")
PODFILE_LOCK = Path("Podfile.lock")

FLUTTER_CLEAN = "flutter clean"
FLUTTER_PUB_GET = "flutter pub get"
DART_FIX = "dart fix --apply"
BUILD_RUNNER_BUILD = "dart run build_runner build --delete-conflicting-outputs"
BUILD_RUNNER_WATCH = "dart run build_runner watch --delete-conflicting-outputs"
LAUNCHER_ICONS = "dart run flutter_launcher_icons"
FLUTTERGEN = "fluttergen -c pubspec.yaml"
POD_INSTALL = "pod install"
FASTLANE = "fastlane"

BETA_LANE = "ios beta"
PRODUCTION_LANE = "ios release"

APP_STORE_CONNECT_URL = "https://appstoreconnect.apple.com/apps"
PLAY_CONSOLE_URL = "https://play.google.com/console/u/0/developers/"


class GenerateKind(StrEnum):
    SWAGGER = "swagger"
    ICON = "icon"
    ASSETS = "assets"


def clean_steps() -> list[Step]:
    """Deep clean: flutter clean, pub get, then a fresh pod install on iOS."""
    return [
        run(FLUTTER_CLEAN),
        run(FLUTTER_PUB_GET),
        IfExists(
            IOS_DIR,
            then=(
                InDirectory(
                    IOS_DIR,
                    steps=(
                        RemoveFile(PODFILE_LOCK),
                        IfExists(
                            PODFILE,
                            then=(run(POD_INSTALL),),
                            otherwise=(Notice("Podfile not found. Skipping pod install."),),
                        ),
                    ),
                ),
            ),
        ),
    ]


def fix_steps() -> list[Step]:
    return [run(DART_FIX)]


def generate_steps(kind: GenerateKind) -> list[Step]:
    match kind:
        case GenerateKind.SWAGGER:
            return [run(BUILD_RUNNER_BUILD)]
        case GenerateKind.ICON:
            return [run(LAUNCHER_ICONS)]
        case GenerateKind.ASSETS:
            return [run(FLUTTERGEN)]


def watch_steps() -> list[Step]:
    """The build_runner watcher. Blocks until the watcher exits or is interrupted."""
    return [run(BUILD_RUNNER_WATCH)]


def release_lane(track: str) -> str | None:
    """Map a release track to its fastlane lane.

    `release` is kept as an alias of `production`. Returns None for tracks
    that have no lane.
    """
    match track:
        case "beta":
            return BETA_LANE
        case "production" | "release":
            return PRODUCTION_LANE
        case _:
            return None


def release_steps(track: str) -> list[Step] | None:
    """Install pods then run fastlane from the iOS directory, or None if unsupported."""
    lane = release_lane(track)
    if lane is None:
        return None
    return [
        InDirectory(
            IOS_DIR,
            steps=(
                run(POD_INSTALL),
                run(FASTLANE, *lane.split()),
            ),
        )
    ]


def service_url(service: str) -> str | None:
    """Resolve a store console URL from a service name, or None if unknown."""
    match service:
        case "apple" | "ios":
            return APP_STORE_CONNECT_URL
        case "google" | "android":
            return PLAY_CONSOLE_URL
        case _:
            return None
