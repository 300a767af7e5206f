# -*- coding: utf-8 -*-
"""project-snapshot: flatten a project tree into one text file for LLM context."""

__version__ = "0.4.0"
