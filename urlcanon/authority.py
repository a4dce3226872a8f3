"""
urlcanon.authority — ``[user:password@]host[:port]``.
"""

from dataclasses import dataclass
from typing import Optional

from urlcanon.host import HostName

NO_PORT = -1


@dataclass(frozen=True)
class Authority:
    host_name: HostName
    port: int = NO_PORT
    user: Optional[str] = None
    password: Optional[str] = None

    @classmethod
    def from_user_info(cls, host_name: HostName, port: int = NO_PORT,
                       user_info: Optional[str] = None) -> "Authority":
        """Build an authority, splitting ``user:password`` on the first ':'.

        Userinfo without a ':' carries no usable credentials and is dropped.
        """
        user = password = None
        if user_info is not None and ":" in user_info:
            user, password = user_info.split(":", 1)
        return cls(host_name, port, user, password)

    def as_string(self) -> str:
        prefix = ""
        if self.user is not None or self.password is not None:
            prefix = f"{self.user or ''}:{self.password or ''}@"
        suffix = f":{self.port}" if self.port != NO_PORT else ""
        return prefix + self.host_name.as_string() + suffix

    def optimized_for_proximity_order(self) -> str:
        # userinfo and port never take part in the dedup key
        return self.host_name.optimized_for_proximity_order()
