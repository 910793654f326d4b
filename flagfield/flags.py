"""
Permission flag constants.

These are the Discord (API v10) permission bits. Each permission is a single
bit of a 64-bit field; the table spans more than 32 bits, so permission
bitfields are wide (serialized as decimal strings).

Aggregates:
- ALL: Every permission in the table
- DEFAULT: The permissions granted to a regular member by default
- STAGE_MODERATOR: Permissions required to moderate stage channels
"""

from typing import Final, Mapping

from .registry import build_aliases, build_registry, union


class PermissionFlagsBits:
    """Bit flags for guild and channel permissions, in declaration order."""

    CreateInstantInvite: Final[int] = 1 << 0
    KickMembers: Final[int] = 1 << 1
    BanMembers: Final[int] = 1 << 2
    Administrator: Final[int] = 1 << 3            # Grants every other permission
    ManageChannels: Final[int] = 1 << 4
    ManageGuild: Final[int] = 1 << 5
    AddReactions: Final[int] = 1 << 6
    ViewAuditLog: Final[int] = 1 << 7
    PrioritySpeaker: Final[int] = 1 << 8
    Stream: Final[int] = 1 << 9
    ViewChannel: Final[int] = 1 << 10
    SendMessages: Final[int] = 1 << 11
    SendTTSMessages: Final[int] = 1 << 12
    ManageMessages: Final[int] = 1 << 13
    EmbedLinks: Final[int] = 1 << 14
    AttachFiles: Final[int] = 1 << 15
    ReadMessageHistory: Final[int] = 1 << 16
    MentionEveryone: Final[int] = 1 << 17
    UseExternalEmojis: Final[int] = 1 << 18
    ViewGuildInsights: Final[int] = 1 << 19
    Connect: Final[int] = 1 << 20
    Speak: Final[int] = 1 << 21
    MuteMembers: Final[int] = 1 << 22
    DeafenMembers: Final[int] = 1 << 23
    MoveMembers: Final[int] = 1 << 24
    UseVAD: Final[int] = 1 << 25                  # Voice activity detection
    ChangeNickname: Final[int] = 1 << 26
    ManageNicknames: Final[int] = 1 << 27
    ManageRoles: Final[int] = 1 << 28
    ManageWebhooks: Final[int] = 1 << 29
    ManageGuildExpressions: Final[int] = 1 << 30  # Formerly ManageEmojisAndStickers
    UseApplicationCommands: Final[int] = 1 << 31
    RequestToSpeak: Final[int] = 1 << 32
    ManageEvents: Final[int] = 1 << 33
    ManageThreads: Final[int] = 1 << 34
    CreatePublicThreads: Final[int] = 1 << 35
    CreatePrivateThreads: Final[int] = 1 << 36
    UseExternalStickers: Final[int] = 1 << 37
    SendMessagesInThreads: Final[int] = 1 << 38
    UseEmbeddedActivities: Final[int] = 1 << 39
    ModerateMembers: Final[int] = 1 << 40
    ViewCreatorMonetizationAnalytics: Final[int] = 1 << 41
    UseSoundboard: Final[int] = 1 << 42
    CreateGuildExpressions: Final[int] = 1 << 43
    CreateEvents: Final[int] = 1 << 44
    UseExternalSounds: Final[int] = 1 << 45
    SendVoiceMessages: Final[int] = 1 << 46
    SendPolls: Final[int] = 1 << 49
    UseExternalApps: Final[int] = 1 << 50


PERMISSION_FLAGS: Final[Mapping[str, int]] = build_registry(PermissionFlagsBits)

# Former names, still accepted by resolve() but never listed
PERMISSION_ALIASES: Final[Mapping[str, str]] = build_aliases(
    {'ManageEmojisAndStickers': 'ManageGuildExpressions'},
    PERMISSION_FLAGS,
)

# Compound permissions
ALL: Final[int] = union(PERMISSION_FLAGS)
DEFAULT: Final[int] = 104324673
STAGE_MODERATOR: Final[int] = (
    PermissionFlagsBits.ManageChannels
    | PermissionFlagsBits.MuteMembers
    | PermissionFlagsBits.MoveMembers
)
