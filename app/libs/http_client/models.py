from dataclasses import dataclass, field


@dataclass(frozen=True)
class Request:
    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    connect_timeout: float = 6.0
    read_timeout: float = 8.0


@dataclass(frozen=True)
class Response:
    status_code: int
    headers: dict[str, str]
    body: bytes
    latency_ms: int
    request: Request

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def text(self, encoding: str = "utf-8") -> str:
        return self.body.decode(encoding)
