# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Sensor-fusion driver interface.

A driver is a bundle of callbacks plus an opaque, driver-specific config.
The filter itself (its state, its maths) lives entirely in the driver; this
module only validates the data carriers and dispatches.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from . import config as _cfg
from .exceptions import LinalgError
from .utils import check_length
from .vectors import Vector

logger = logging.getLogger(__name__)

InitHandler = Callable[[int], None]
FeedHandler = Callable[[Optional[Vector], Optional[Vector], Optional[Vector]], None]
GetQuatHandler = Callable[[Vector], None]
ErrorHandler = Callable[[Any, Exception], None]


@dataclass
class FusionDriver:
    """
    Callback slots of an attitude-estimation driver.

    init_handler(freq)
        Prepare the filter for samples arriving at `freq` Hz.
    feed_handler(accel, mag, gyro)
        Consume one set of 3-axis samples; any of them may be None.
    get_quat_handler(q)
        Write the current orientation into the 4-vector `q` (r, i, j, k).
    error_handler(config, error)
        Called when feeding fails, before the error propagates.
    """

    init_handler: InitHandler
    feed_handler: FeedHandler
    get_quat_handler: GetQuatHandler
    error_handler: Optional[ErrorHandler] = None
    config: Any = None

    def init(self, freq: int) -> None:
        if freq <= 0:
            raise LinalgError(f"sample frequency must be positive, got {freq}")
        self.init_handler(freq)

    def feed(
        self,
        accel: Optional[Vector] = None,
        mag: Optional[Vector] = None,
        gyro: Optional[Vector] = None,
    ) -> None:
        try:
            for name, sample in (("accel", accel), ("mag", mag), ("gyro", gyro)):
                if sample is not None and _cfg.BOUNDS_CHECKS:
                    check_length(sample.sz, 3, name)
            self.feed_handler(accel, mag, gyro)
        except LinalgError as e:
            logger.debug(f"FusionDriver.feed(): {e}")
            if self.error_handler is not None:
                self.error_handler(self.config, e)
            raise

    def get_quat(self, q: Vector) -> Vector:
        if _cfg.BOUNDS_CHECKS:
            check_length(q.sz, 4, "q")
        self.get_quat_handler(q)
        return q
