"""Runtime environment discovery (home directory)."""

from .home import JVM_HOME_ENV, get_jvm_home

__all__ = ["JVM_HOME_ENV", "get_jvm_home"]
