# -*- coding: utf-8 -*-
"""Nutrition domain (food logging, portions, daily macro progress)."""
