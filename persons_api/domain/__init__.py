"""Typed records exchanged between repositories, services and routers."""
