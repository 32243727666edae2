from pathlib import Path
from typing import Dict, List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Server Settings
    host: str = Field(default="127.0.0.1", description="Server host")
    port: int = Field(default=15888, description="Server port")
    log_level: str = Field(default="INFO", description="Logging level")

    # Node / indexer
    request_timeout_seconds: int = Field(default=30, description="Request timeout for node and indexer calls")

    # Tezos
    tezos_networks: List[str] = Field(
        default_factory=lambda: ["mainnet", "ghostnet"],
        description="Tezos networks served by this gateway",
    )
    tezos_node_urls: Dict[str, str] = Field(
        default_factory=lambda: {
            "mainnet": "https://mainnet.api.tez.ie",
            "ghostnet": "https://ghostnet.ecadinfra.com",
        },
        description="Node RPC base URL per network",
    )
    tezos_tzkt_urls: Dict[str, str] = Field(
        default_factory=lambda: {
            "mainnet": "https://api.tzkt.io",
            "ghostnet": "https://api.ghostnet.tzkt.io",
        },
        description="TzKT indexer base URL per network",
    )
    tezos_chain_ids: Dict[str, str] = Field(
        default_factory=lambda: {
            "mainnet": "NetXdQprcVkpaWU",
            "ghostnet": "NetXnHfVqm9iesp",
        },
        description="Chain identifier per network, used to filter token lists",
    )
    tezos_native_symbol: str = Field(default="XTZ", description="Native token symbol")
    tezos_native_decimals: int = Field(default=6, ge=0, description="Native token decimals")
    tezos_token_list_path: Optional[str] = Field(
        default=None,
        description="Override path to a token list JSON file (applies to every network)",
    )

    def token_list_path(self, network: str) -> Path:
        if self.tezos_token_list_path:
            return Path(self.tezos_token_list_path)
        return Path(__file__).resolve().parent / "conf" / "lists" / f"tezos_{network}.json"


# Global settings instance
settings = Settings()
