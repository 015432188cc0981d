"""
Config — Конфигурация точности и источника времени

Два независимых выбора:
- precision: единица хранения (наносекунды или миллисекунды).
  Фиксируется один раз при импорте fast_utc.core.domain.units.
- clock_mode: источник now() (точные системные часы или кэшированные
  coarse-часы с фоновым обновлением). Применяется явно через
  fast_utc.clock.init_clock_from_config().

Переменные окружения:
    FAST_UTC_PRECISION          "ns" | "ms"          (default: "ns")
    FAST_UTC_CLOCK_MODE         "exact" | "coarse"   (default: "exact")
    FAST_UTC_CLOCK_REFRESH_SEC  float > 0            (default: 1.0)
"""

import math
import os
from dataclasses import dataclass
from enum import Enum
from typing import Final, Mapping, Optional


ENV_PRECISION: Final[str] = "FAST_UTC_PRECISION"
ENV_CLOCK_MODE: Final[str] = "FAST_UTC_CLOCK_MODE"
ENV_CLOCK_REFRESH_SEC: Final[str] = "FAST_UTC_CLOCK_REFRESH_SEC"

# Период обновления coarse-часов по умолчанию (секунды)
DEFAULT_REFRESH_INTERVAL_SEC: Final[float] = 1.0


# =============================================================================
# ENUMS
# =============================================================================


class Precision(str, Enum):
    """Единица хранения Timestamp/TimeDelta"""

    NANOSECOND = "ns"
    MILLISECOND = "ms"


class ClockMode(str, Enum):
    """Режим источника текущего времени"""

    EXACT = "exact"
    COARSE = "coarse"


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class FastUtcConfig:
    """Конфигурация fast_utc.

    - precision: единица хранения значений
    - clock_mode: источник now()
    - refresh_interval_sec: период фонового обновления coarse-часов
    """

    precision: Precision = Precision.NANOSECOND
    clock_mode: ClockMode = ClockMode.EXACT
    refresh_interval_sec: float = DEFAULT_REFRESH_INTERVAL_SEC

    def __post_init__(self) -> None:
        if not isinstance(self.precision, Precision):
            raise ValueError(f"precision must be a Precision, got {self.precision!r}")
        if not isinstance(self.clock_mode, ClockMode):
            raise ValueError(f"clock_mode must be a ClockMode, got {self.clock_mode!r}")
        if not math.isfinite(self.refresh_interval_sec) or self.refresh_interval_sec <= 0:
            raise ValueError(
                f"refresh_interval_sec must be positive, got {self.refresh_interval_sec}"
            )


def _parse_enum(enum_cls, raw: str, env_name: str):
    try:
        return enum_cls(raw.strip().lower())
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValueError(f"{env_name}={raw!r} is invalid (expected one of: {allowed})") from None


def load_config(environ: Optional[Mapping[str, str]] = None) -> FastUtcConfig:
    """
    Загрузка конфигурации из переменных окружения.

    Args:
        environ: Источник переменных (default: os.environ)

    Returns:
        FastUtcConfig; отсутствующие переменные берут значения по умолчанию

    Raises:
        ValueError: Если значение переменной невалидно
    """
    env = os.environ if environ is None else environ

    precision = Precision.NANOSECOND
    if env.get(ENV_PRECISION):
        precision = _parse_enum(Precision, env[ENV_PRECISION], ENV_PRECISION)

    clock_mode = ClockMode.EXACT
    if env.get(ENV_CLOCK_MODE):
        clock_mode = _parse_enum(ClockMode, env[ENV_CLOCK_MODE], ENV_CLOCK_MODE)

    refresh_interval_sec = DEFAULT_REFRESH_INTERVAL_SEC
    if env.get(ENV_CLOCK_REFRESH_SEC):
        raw = env[ENV_CLOCK_REFRESH_SEC]
        try:
            refresh_interval_sec = float(raw)
        except ValueError:
            raise ValueError(f"{ENV_CLOCK_REFRESH_SEC}={raw!r} is not a number") from None

    return FastUtcConfig(
        precision=precision,
        clock_mode=clock_mode,
        refresh_interval_sec=refresh_interval_sec,
    )
