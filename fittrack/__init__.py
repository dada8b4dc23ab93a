# -*- coding: utf-8 -*-
"""FitTrack backend: workouts, nutrition, macro goals and meal planning."""
