"""Corrigibility simulator: an agent facing a reward-override button."""
