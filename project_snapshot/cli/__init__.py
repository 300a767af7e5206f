# -*- coding: utf-8 -*-
"""Command line glue: config, VCS root lookup, reveal-in-file-manager."""
