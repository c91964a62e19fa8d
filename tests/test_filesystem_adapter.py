"""
Test cases for loading unit files.
"""

import sys

import pytest
from layered_hooks.hooks.base import HookLoadError, HookUnit
from layered_hooks.hooks.filesystem_adapter import load_unit
from layered_hooks.hooks.orchestrator import Dispatcher


class TestLoadUnit:
    """Test cases for load_unit."""

    def test_run_is_preferred(self, write_unit):
        """run() wins over main()."""
        path = write_unit(
            "on_control_center.py",
            """
            def main():
                return "main"

            def run():
                return "run"
            """,
        )
        assert load_unit(str(path))() == "run"

    def test_main_fallback(self, write_unit):
        """main() is used when there is no run()."""
        path = write_unit("on_control_center.py", "def main():\n    return 'main'\n")
        assert load_unit(str(path))() == "main"

    def test_hook_named_fallback(self, write_unit):
        """A function named after the hook is the last fallback."""
        path = write_unit("on_user_rights.py", "def on_user_rights(pid):\n    return pid * 2\n")
        assert load_unit(HookUnit(str(path), "global", 0), "on_user_rights")(4) == 8

    def test_callable_object_accepted(self, write_unit):
        """Any callable bound to run is accepted."""
        path = write_unit(
            "on_control_center.py",
            """
            class Runner:
                def __call__(self):
                    return "called"

            run = Runner()
            """,
        )
        assert load_unit(str(path))() == "called"

    def test_no_callable_raises(self, write_unit):
        """A unit without a callable is a HookLoadError."""
        path = write_unit("on_control_center.py", "run = 42\n")
        with pytest.raises(HookLoadError, match="callable"):
            load_unit(str(path))

    def test_import_failure_raises_with_cause(self, write_unit):
        """Import-time errors are wrapped and chained."""
        path = write_unit("on_control_center.py", "raise RuntimeError('boom')\n")
        with pytest.raises(HookLoadError) as excinfo:
            load_unit(str(path))
        assert isinstance(excinfo.value.__cause__, RuntimeError)

    def test_syntax_error_raises(self, write_unit):
        """A syntax error is a HookLoadError."""
        path = write_unit("on_control_center.py", "def run(:\n")
        with pytest.raises(HookLoadError):
            load_unit(str(path))

    def test_file_reexecuted_each_load(self, write_unit):
        """Edits to a unit take effect on the next load."""
        path = write_unit("on_control_center.py", "def run():\n    return 1\n")
        assert load_unit(str(path))() == 1

        path.write_text("def run():\n    return 222\n")
        assert load_unit(str(path))() == 222

    def test_module_not_registered(self, write_unit):
        """The unit module is gone from sys.modules after loading."""
        path = write_unit("on_control_center.py", "def run():\n    return __name__\n")
        module_name = load_unit(str(path))()
        assert module_name.startswith("_layered_hook_on_control_center_")
        assert module_name not in sys.modules

    def test_module_not_registered_after_failure(self, write_unit):
        """A failing import does not leave the module behind."""
        path = write_unit("on_control_center.py", "undefined_name.append(__name__)\n")
        with pytest.raises(HookLoadError):
            load_unit(str(path))
        assert not [name for name in sys.modules if name.startswith("_layered_hook_on_control_center_")]

    def test_dataclass_unit(self, write_unit):
        """Units may define dataclasses with postponed annotations."""
        path = write_unit(
            "on_control_center.py",
            """
            from __future__ import annotations

            from dataclasses import dataclass


            @dataclass
            class Message:
                text: str
                count: int = 1


            def run():
                return Message("hello")
            """,
        )
        message = load_unit(str(path))()
        assert message.text == "hello"
        assert message.count == 1

    def test_non_py_extension(self, write_unit):
        """Unit files with another extension load as python source."""
        path = write_unit("on_control_center.hook", "def run():\n    return 'ok'\n")
        assert load_unit(str(path))() == "ok"

    def test_dispatch_with_custom_extension(self, hooks_dir, write_unit):
        """A dispatcher configured for '.hook' files runs them."""
        write_unit("on_control_center.hook", "def run():\n    return 'ok'\n")
        write_unit("scope-3/on_user_rights/00-a.hook", "def run(pid):\n    return pid\n")
        dispatcher = Dispatcher(hooks_dir=str(hooks_dir), extension=".hook")

        assert dispatcher.invoke("on_control_center") == "ok"
        assert dispatcher.invoke("on_user_rights", "3", ("3",)) == "3"
