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

import logging
import sys

from gunicorn.app.wsgiapp import run
from gunicorn.glogging import Logger


class SuppressSigtermFilter(logging.Filter):
    """Drop the error record gunicorn writes when a worker gets SIGTERM"""

    def filter(self, record):
        if record.levelname == "ERROR" and "was sent SIGTERM" in record.getMessage():
            return False
        return True


class BonzShopLogger(Logger):
    def setup(self, cfg):
        super().setup(cfg)
        self.error_log.addFilter(SuppressSigtermFilter())


if __name__ == "__main__":
    if not any(arg.startswith("--logger-class") for arg in sys.argv):
        sys.argv += ["--logger-class", "run.BonzShopLogger"]
    run(prog="gunicorn")
