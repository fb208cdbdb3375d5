from __future__ import annotations


class VoiceThreadError(RuntimeError):
    """Base error for voice/thread linkage failures."""


class PlatformCallError(VoiceThreadError):
    """A Discord REST call failed; the message names the step that failed."""


class NotLinkedError(VoiceThreadError):
    pass


class UnauthorizedError(VoiceThreadError):
    pass


class MalformedInteractionError(VoiceThreadError):
    pass
