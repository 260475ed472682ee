# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import OperationalError

from authlicensing.shared.errors.base import StoreUnavailableError
from authlicensing.shared.logging import logger


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except OperationalError as exc:
        logger.error(f"store.{operation}: database unavailable ({type(exc.orig).__name__})")
        raise StoreUnavailableError(context={"operation": operation}) from exc
