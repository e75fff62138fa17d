# tramfsm/__main__.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import sys

from tramfsm.cli import main

sys.exit(main())
