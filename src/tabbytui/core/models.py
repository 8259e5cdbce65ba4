from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ChatRole(str, Enum):
    """Role of a chat message sender."""

    USER = "user"
    ASSISTANT = "assistant"

    @classmethod
    def parse(cls, value: str) -> "ChatRole":
        """Convert a wire role string to a ChatRole.

        Raises:
            ValueError: If the role is not one the server understands
        """
        try:
            return _ROLE_LOOKUP[value.lower()]
        except KeyError:
            raise ValueError(f"Unknown chat role: {value!r}") from None


_ROLE_LOOKUP = {
    "user": ChatRole.USER,
    "assistant": ChatRole.ASSISTANT,
}


class Message(BaseModel):
    """A single message in a conversation."""

    model_config = ConfigDict(frozen=True)

    role: ChatRole = Field(description="Who sent the message")
    content: str = Field(default="", description="Message text")


class Version(BaseModel):
    """Build information reported by the server."""

    model_config = ConfigDict(frozen=True)

    build_date: str
    build_timestamp: str
    git_sha: str
    git_describe: str


class HealthState(BaseModel):
    """Payload of GET /v1/health.

    Validated as a whole: a payload missing any required field is rejected
    rather than producing a partially populated state.
    """

    model_config = ConfigDict(frozen=True)

    model: str | None = Field(default=None, description="Completion model name")
    chat_model: str | None = Field(default=None, description="Chat model name")
    device: str = Field(description="Inference device, e.g. 'cuda' or 'cpu'")
    arch: str = Field(description="CPU architecture of the server")
    cpu_info: str = Field(description="CPU brand string")
    cpu_count: int = Field(ge=0, description="Number of logical CPUs")
    cuda_devices: list[str] = Field(default_factory=list, description="CUDA device names")
    version: Version


class HealthViewModel(BaseModel):
    """What the UI knows about server health.

    ``health_state`` is None only for the UNREACHABLE sentinel.
    """

    model_config = ConfigDict(frozen=True)

    health_state: HealthState | None = None

    @property
    def is_reachable(self) -> bool:
        return self.health_state is not None


UNREACHABLE = HealthViewModel(health_state=None)


class StreamChunk(BaseModel):
    """One newline-delimited record of a streaming completion body."""

    model_config = ConfigDict(frozen=True)

    content: str


class ChatCompletionRequest(BaseModel):
    """Wire body of POST /v1beta/chat/completions."""

    id: str = Field(description="Opaque session identifier")
    messages: list[Message] = Field(default_factory=list)

    def to_wire(self) -> dict:
        """Serialize to the JSON body sent to the server."""
        return self.model_dump(mode="json")
