# SPDX-License-Identifier: MIT
"""Interface modules aggregating protocols for dieb.

Import the specific interface modules (e.g. ``dieb.interfaces.runtime``)
directly; this package does not re-export concrete implementations.
"""

__all__: tuple[str, ...] = ()
