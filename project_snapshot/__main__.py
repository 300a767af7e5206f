#!/usr/bin/env python3
# -*- coding: utf-8 -*-
from project_snapshot.cli.main import main

if __name__ == "__main__":
    raise SystemExit(main())
