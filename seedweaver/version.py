#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SeedWeaver v0.1.0

Version information.

Author: SeedWeaver Development Team
License: MIT - See LICENSE
"""

__version__ = "0.1.0"

# SeedWeaver v0.1.0
# Any usage is subject to this software's license.
