"""Beehiiv post listing to RSS 2.0 feed converter."""
