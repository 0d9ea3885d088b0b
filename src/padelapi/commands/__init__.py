"""Built-in CLI sub-commands for padelapi.

* :mod:`~padelapi.commands.users` -- list, look up, search, and count
  directory users against the configured backend.
* :mod:`~padelapi.commands.config` -- view and modify global settings.
* :mod:`~padelapi.commands.health` -- check that the backend is up.

The ``users`` and ``config`` modules export a :class:`typer.Typer`
sub-application, ``health`` a single command; all are registered on the
root app in :mod:`padelapi.app`.
"""
