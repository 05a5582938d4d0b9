# Copyright (c) MoabDB.
# SPDX-License-Identifier: MIT
"""MoabDB client.

Fetch daily or intraday equity data from the MoabDB API as a pandas DataFrame::

    from moabdb import Ok, Err, WindowBuilder, WindowLength, get_equity

    window = WindowBuilder().length(WindowLength.months(3)).build().unwrap()
    match get_equity("AAPL", window, intraday=False):
        case Ok(df):
            print(df)
        case Err(error):
            print(error)
"""

from __future__ import annotations

from moabdb.application.use_cases.get_equity import GetEquityUseCase, fetch, get_equity
from moabdb.domain.entities.credentials import Credentials
from moabdb.domain.entities.window import Window, WindowBuilder, WindowLength, WindowUnit
from moabdb.domain.enums.datatype import Datatype
from moabdb.domain.enums.errors import MoabError
from moabdb.domain.results import Err, Ok, Result
from moabdb.infrastructure.external_apis.moabdb.client import MoabDBClient
from moabdb.infrastructure.external_apis.moabdb.settings import MoabDBSettings
from moabdb.infrastructure.logging.logger import configure_root_logging

__all__ = [
    "Credentials",
    "Datatype",
    "Err",
    "GetEquityUseCase",
    "MoabDBClient",
    "MoabDBSettings",
    "MoabError",
    "Ok",
    "Result",
    "Window",
    "WindowBuilder",
    "WindowLength",
    "WindowUnit",
    "configure_root_logging",
    "fetch",
    "get_equity",
]
