from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator

from app.utils import as_utc

# SQLite returns naive datetimes; always emit them as UTC
UTCDatetime = Annotated[datetime, AfterValidator(as_utc)]
