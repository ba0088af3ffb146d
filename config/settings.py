from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Demo mode: deterministic fixture analyzers, no network access
    demo_mode: bool = True

    # Solana RPC (helius_rpc_url wins, then solana_rpc_url, then public mainnet)
    helius_api_key: str = ""
    helius_rpc_url: str = ""
    solana_rpc_url: str = "https://api.mainnet-beta.solana.com"
    rpc_max_rps: float = 5.0

    # Rugcheck (free, no key): LP lock status
    rugcheck_max_rps: float = 2.0
    lp_locked_min_pct: float = 90.0  # LP counts as locked at/above this share

    # Jupiter token list (symbol resolution)
    jupiter_api_key: str = ""

    # TwitterAPI.io (social signals, required in live mode)
    twitter_api_key: str = ""
    twitter_max_rps: float = 1.0

    # Telegram bot
    telegram_bot_token: str = ""
    telegram_admin_id: int = 0

    # Dashboard / API
    dashboard_enabled: bool = True
    dashboard_port: int = 3001
    bulk_check_max_symbols: int = 10
    live_feed_size: int = 20

    # Caller-level timeout around a single analysis
    analysis_timeout_sec: float = 30.0

    @property
    def rpc_url(self) -> str:
        """Effective Solana RPC endpoint."""
        if self.helius_rpc_url:
            return self.helius_rpc_url
        if self.helius_api_key:
            return f"https://mainnet.helius-rpc.com/?api-key={self.helius_api_key}"
        return self.solana_rpc_url


settings = Settings()
