from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    telemetry_address: str = ":9115"
    telemetry_endpoint: str = "/metrics"

    queue_root: str = "/var/spool/postfix"
    namespace: str = "postfix"

    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    def _split_address(self):
        host, sep, port = self.telemetry_address.rpartition(":")
        if not sep or not port.isdigit():
            raise ValueError(
                f"Invalid telemetry address {self.telemetry_address!r}; expected host:port"
            )
        return host, int(port)

    @property
    def listen_host(self) -> str:
        host, _ = self._split_address()
        return host.strip("[]") or "0.0.0.0"

    @property
    def listen_port(self) -> int:
        _, port = self._split_address()
        return port


@lru_cache
def get_settings() -> Settings:
    return Settings()
