# -*- coding: utf-8 -*-
"""Screen state holders driven by async services."""
