"""
Copyright BOOSTRY Co., Ltd.

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.

You may obtain a copy of the License at
http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing,
software distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.

See the License for the specific language governing permissions and
limitations under the License.

SPDX-License-Identifier: Apache-2.0
"""

import asyncio
import signal
from asyncio import Event
from logging import Logger

SHUTDOWN_SIGNALS = (signal.SIGTERM, signal.SIGINT)


def setup_signal_handler(logger: Logger, is_shutdown: Event) -> None:
    """Set the shutdown event on SIGTERM/SIGINT

    Processors check the event between messages, so the message being
    delivered is finished before the process exits.
    """
    loop = asyncio.get_running_loop()

    def _on_signal(sig: signal.Signals):
        logger.info(f"Service is shutting down due to {sig.name}")
        is_shutdown.set()

    for sig in SHUTDOWN_SIGNALS:
        loop.add_signal_handler(sig, _on_signal, sig)
