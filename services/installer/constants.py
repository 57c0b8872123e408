"""Constants shared across the installer service modules."""

from __future__ import annotations

USER_AGENT_PRODUCT = "MeldMC-Installer"

PRODUCT_NAME = "MeldMC"
ARTIFACT_PREFIX = "meldmc"
VERSIONS_DIRNAME = "versions"
PROFILES_FILENAME = "launcher_profiles.json"

PLATFORM_WINDOWS = "win"
PLATFORM_MAC = "mac"
PLATFORM_MAC_ARM64 = "mac-aarch64"
PLATFORM_LINUX = "linux"

PROFILE_TYPE = "custom"
PROFILE_ICON = "Grass"
PROFILE_EPOCH_TIMESTAMP = "1970-01-01T00:00:00.000Z"

STEP_CREATING_DIRECTORIES = "Creating directories..."
STEP_DOWNLOADING = "Downloading client configuration..."
STEP_CREATING_PROFILE = "Creating launcher profile..."
STEP_COMPLETE = "Installation complete!"

PROGRESS_CREATING_DIRECTORIES = 10.0
PROGRESS_DOWNLOADING = 50.0
PROGRESS_CREATING_PROFILE = 90.0
PROGRESS_COMPLETE = 100.0

MESSAGE_MISSING_DIRECTORY = "Please select a Minecraft directory"
MESSAGE_MISSING_VERSION = "Please select a version"
MESSAGE_DIRECTORY_FAILED = "Failed to create version directory"
MESSAGE_DOWNLOAD_FAILED = "Failed to download client configuration"
MESSAGE_SAVE_FAILED = "Failed to save client configuration"
MESSAGE_PROFILE_FAILED = "Failed to create launcher profile"
MESSAGE_UNEXPECTED_FAILURE = "Installation failed"

PROGRESS_QUEUE_SIZE = 10
