"""fallible.core — public API for Result, AsyncResult and helpers."""

from fallible.core.async_result import (
    AsyncResult as AsyncResult,
)
from fallible.core.config import (
    ResultConfig as ResultConfig,
)
from fallible.core.config import (
    config_from_env as config_from_env,
)
from fallible.core.config import (
    get_config as get_config,
)
from fallible.core.config import (
    set_config as set_config,
)
from fallible.core.errors import (
    ExpectError as ExpectError,
)
from fallible.core.errors import (
    Fault as Fault,
)
from fallible.core.errors import (
    ResultError as ResultError,
)
from fallible.core.errors import (
    UnwrapError as UnwrapError,
)
from fallible.core.functions import (
    and_ as and_,
)
from fallible.core.functions import (
    error as error,
)
from fallible.core.functions import (
    flatten as flatten,
)
from fallible.core.functions import (
    from_ as from_,
)
from fallible.core.functions import (
    is_error as is_error,
)
from fallible.core.functions import (
    is_ok as is_ok,
)
from fallible.core.functions import (
    is_result as is_result,
)
from fallible.core.functions import (
    ok as ok,
)
from fallible.core.functions import (
    or_ as or_,
)
from fallible.core.functions import (
    sequence as sequence,
)
from fallible.core.functions import (
    unwrap as unwrap,
)
from fallible.core.protocols import (
    Thenable as Thenable,
)
from fallible.core.protocols import (
    is_thenable as is_thenable,
)
from fallible.core.result import (
    Err as Err,
)
from fallible.core.result import (
    Ok as Ok,
)
from fallible.core.result import (
    Result as Result,
)
