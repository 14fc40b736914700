"""
Configuration management for Candlescan.
"""

import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .models.detections import Detection, PatternType
from .models.market_data import Instrument


DEFAULT_INSTRUMENTS: List[Instrument] = [
    Instrument(symbol="EUR/USD", name="Euro / US Dollar", base_price=1.0854),
    Instrument(symbol="GBP/USD", name="British Pound / US Dollar", base_price=1.2642),
    Instrument(symbol="USD/JPY", name="US Dollar / Japanese Yen", base_price=150.12),
    Instrument(symbol="AUD/USD", name="Australian Dollar / US Dollar", base_price=0.6534),
    Instrument(symbol="USD/CHF", name="US Dollar / Swiss Franc", base_price=0.8812),
    Instrument(symbol="NZD/USD", name="NZ Dollar / US Dollar", base_price=0.6100),
    Instrument(symbol="USD/CAD", name="US Dollar / Canadian Dollar", base_price=1.3500),
    Instrument(symbol="XAU/USD", name="Gold / US Dollar", base_price=2035.00),
]


def _split_list(raw: str) -> List[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO")
    file_path: Optional[str] = Field(default="./logs/candlescan.log")
    max_size: str = Field(default="10MB")
    backup_count: int = Field(default=5)


class DataConfig(BaseModel):
    """Candle data configuration."""

    instruments: List[Instrument] = Field(default_factory=lambda: list(DEFAULT_INSTRUMENTS))
    default_instruments: List[str] = Field(
        default_factory=lambda: [i.symbol for i in DEFAULT_INSTRUMENTS]
    )
    default_timeframes: List[str] = Field(default=["H4", "D1", "W1"])
    history_length: int = Field(default=200, ge=2, le=5000)
    simulation_volatility: float = Field(default=0.002, gt=0.0, le=0.1)

    def get_instrument(self, symbol: str) -> Optional[Instrument]:
        """Look up an instrument in the catalogue by symbol."""
        symbol = symbol.upper().strip()
        for instrument in self.instruments:
            if instrument.symbol == symbol:
                return instrument
        return None


class NotificationConfig(BaseModel):
    """Which detections are of interest for alerting and routing."""

    master_enabled: bool = Field(default=True)
    instruments: List[str] = Field(
        default_factory=lambda: [i.symbol for i in DEFAULT_INSTRUMENTS]
    )
    patterns: List[PatternType] = Field(default_factory=lambda: list(PatternType))

    def allows(self, detection: Detection) -> bool:
        """Check whether a detection should be routed to notifications."""
        if not self.master_enabled:
            return False
        return detection.instrument in self.instruments and detection.pattern in self.patterns


class ScannerConfig(BaseModel):
    """Scanner configuration."""

    confidence_seed: Optional[int] = None


class Config(BaseModel):
    """Main configuration class."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    data: DataConfig = Field(default_factory=DataConfig)
    notifications: NotificationConfig = Field(default_factory=NotificationConfig)
    scanner: ScannerConfig = Field(default_factory=ScannerConfig)

    @classmethod
    def load_from_env(cls, env_file: Optional[str] = None) -> "Config":
        """Load configuration from environment variables."""
        if env_file:
            load_dotenv(env_file)
        else:
            # Try to load from .env file in current directory
            env_path = Path(".env")
            if env_path.exists():
                load_dotenv(env_path)

        # Logging config
        logging = LoggingConfig(
            level=os.getenv("LOG_LEVEL", "INFO"),
            file_path=os.getenv("LOG_FILE_PATH", "./logs/candlescan.log") or None,
            max_size=os.getenv("LOG_MAX_SIZE", "10MB"),
            backup_count=int(os.getenv("LOG_BACKUP_COUNT", "5"))
        )

        # Data config
        catalogue_symbols = ",".join(i.symbol for i in DEFAULT_INSTRUMENTS)
        instruments = _split_list(os.getenv("DEFAULT_INSTRUMENTS", catalogue_symbols))
        timeframes = _split_list(os.getenv("DEFAULT_TIMEFRAMES", "H4,D1,W1"))
        data = DataConfig(
            default_instruments=[s.upper() for s in instruments],
            default_timeframes=[t.upper() for t in timeframes],
            history_length=int(os.getenv("HISTORY_LENGTH", "200")),
            simulation_volatility=float(os.getenv("SIMULATION_VOLATILITY", "0.002"))
        )

        # Notification config
        notify_instruments = os.getenv("NOTIFY_INSTRUMENTS")
        notify_patterns = os.getenv("NOTIFY_PATTERNS")
        notifications = NotificationConfig(
            master_enabled=os.getenv("NOTIFICATIONS_ENABLED", "true").lower() == "true",
            instruments=(
                [s.upper() for s in _split_list(notify_instruments)]
                if notify_instruments else list(data.default_instruments)
            ),
            patterns=(
                [PatternType(p.lower()) for p in _split_list(notify_patterns)]
                if notify_patterns else list(PatternType)
            )
        )

        # Scanner config
        seed = os.getenv("CONFIDENCE_SEED")
        scanner = ScannerConfig(confidence_seed=int(seed) if seed else None)

        return cls(
            logging=logging,
            data=data,
            notifications=notifications,
            scanner=scanner
        )

    def get_timeframes(self) -> List[str]:
        """Configured timeframe labels."""
        return list(self.data.default_timeframes)
