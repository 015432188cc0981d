"""Clock Source — источник текущего времени для Timestamp.now().

Два режима:
- EXACT: каждый вызов читает системные часы (time.time_ns())
- COARSE: вызов читает кэшированное значение, которое фоновый поток
  обновляет с периодом refresh_interval_sec. Отставание от реальных
  часов ограничено периодом обновления.

Coarse-часы являются процесс-глобальным ресурсом с явным жизненным циклом:
init_coarse_clock() при старте процесса, shutdown_coarse_clock() при
завершении. Наружу отдаются только "текущее кэшированное значение"
(now_nanoseconds) и "принудительное обновление" (force_refresh).

Неудачный старт фонового потока фатален (SystemExit).
"""

import logging
import threading
import time
from typing import Optional

from fast_utc.core.config import (
    DEFAULT_REFRESH_INTERVAL_SEC,
    ClockMode,
    FastUtcConfig,
)
from fast_utc.core.math.int_safeguards import clamp_u64


logger = logging.getLogger("fast_utc.clock")


class ClockAlreadyInitializedError(RuntimeError):
    """Coarse-часы уже запущены; повторная инициализация запрещена."""


class ClockNotInitializedError(RuntimeError):
    """Coarse-часы не запущены."""


def exact_now_nanoseconds() -> int:
    """Текущее время системных часов (наносекунды от эпохи)."""
    return clamp_u64(time.time_ns())


# =============================================================================
# COARSE CLOCK
# =============================================================================


class CoarseClock:
    """Кэш текущего времени.

    Запись (refresh) сериализована блокировкой; чтение (recent) сводится к одному
    чтению атрибута без блокировки.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._nanoseconds = exact_now_nanoseconds()

    def refresh(self) -> int:
        """Обновить кэш из системных часов; возвращает новое значение."""
        with self._lock:
            self._nanoseconds = exact_now_nanoseconds()
            return self._nanoseconds

    def recent(self) -> int:
        """Последнее кэшированное значение."""
        return self._nanoseconds


class ClockUpdater:
    """Фоновый поток, периодически обновляющий CoarseClock."""

    def __init__(self, clock: CoarseClock, interval_sec: float = DEFAULT_REFRESH_INTERVAL_SEC):
        """
        Args:
            clock: обновляемый кэш
            interval_sec: период обновления (секунды, > 0)
        """
        if interval_sec <= 0:
            raise ValueError(f"interval_sec must be positive, got {interval_sec}")
        self.clock = clock
        self.interval_sec = interval_sec
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self._thread is not None:
            raise RuntimeError("ClockUpdater already started")
        self._stop_event.clear()
        thread = threading.Thread(
            target=self._run,
            name="fast-utc-clock-updater",
            daemon=True,
        )
        thread.start()
        self._thread = thread

    def stop(self, timeout: Optional[float] = None) -> None:
        """Остановить поток; timeout по умолчанию равен двум периодам обновления."""
        if self._thread is None:
            return
        self._stop_event.set()
        wait = timeout if timeout is not None else 2 * self.interval_sec
        self._thread.join(wait)
        if self._thread.is_alive():
            logger.warning("Clock updater did not stop within %.3fs", wait)
        self._thread = None

    def _run(self) -> None:
        while not self._stop_event.wait(self.interval_sec):
            self.clock.refresh()


# =============================================================================
# ПРОЦЕСС-ГЛОБАЛЬНОЕ СОСТОЯНИЕ
# =============================================================================

_state_lock = threading.Lock()
_coarse_clock: Optional[CoarseClock] = None
_updater: Optional[ClockUpdater] = None


def init_coarse_clock(refresh_interval_sec: float = DEFAULT_REFRESH_INTERVAL_SEC) -> CoarseClock:
    """
    Запуск coarse-часов и фонового обновления.

    После вызова now_nanoseconds() (и Timestamp.now()) читают кэш.

    Args:
        refresh_interval_sec: период фонового обновления (секунды)

    Returns:
        Запущенный CoarseClock

    Raises:
        ClockAlreadyInitializedError: если coarse-часы уже запущены
        SystemExit: если фоновый поток не удалось запустить
    """
    global _coarse_clock, _updater

    with _state_lock:
        if _coarse_clock is not None:
            raise ClockAlreadyInitializedError("Coarse clock is already initialized")

        clock = CoarseClock()
        updater = ClockUpdater(clock, refresh_interval_sec)
        try:
            updater.start()
        except (RuntimeError, OSError) as exc:
            logger.critical("Failed to start clock updater: %s", exc)
            raise SystemExit("Failed to start clock updater") from exc

        _coarse_clock = clock
        _updater = updater

    logger.info("Coarse clock started (refresh every %.3fs)", refresh_interval_sec)
    return clock


def shutdown_coarse_clock(timeout: Optional[float] = None) -> None:
    """Остановка coarse-часов; now_nanoseconds() возвращается к точным часам."""
    global _coarse_clock, _updater

    with _state_lock:
        updater = _updater
        _coarse_clock = None
        _updater = None

    if updater is None:
        return
    updater.stop(timeout)
    logger.info("Coarse clock stopped")


def init_clock_from_config(config: FastUtcConfig) -> ClockMode:
    """
    Применение clock_mode из конфигурации.

    Returns:
        Активный режим после применения
    """
    if config.clock_mode is ClockMode.COARSE:
        init_coarse_clock(config.refresh_interval_sec)
    return current_clock_mode()


def current_clock_mode() -> ClockMode:
    return ClockMode.EXACT if _coarse_clock is None else ClockMode.COARSE


def force_refresh() -> int:
    """
    Принудительное обновление кэша coarse-часов.

    Returns:
        Новое кэшированное значение (наносекунды)

    Raises:
        ClockNotInitializedError: если coarse-часы не запущены
    """
    clock = _coarse_clock
    if clock is None:
        raise ClockNotInitializedError("Coarse clock is not initialized")
    return clock.refresh()


def now_nanoseconds() -> int:
    """Текущее время активного источника (наносекунды от эпохи)."""
    clock = _coarse_clock
    if clock is None:
        return exact_now_nanoseconds()
    return clock.recent()
