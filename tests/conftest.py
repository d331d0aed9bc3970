import logging
from pathlib import Path
from types import SimpleNamespace

import pytest

from displaylink_installer import logging_utils
from displaylink_installer.config import InstallerConfig
from displaylink_installer.context import InvocationContext, Mode, RunContext
from displaylink_installer.lib import command
from displaylink_installer.prompts import ScriptedPrompter

LSUSB_WITH_DOCK = (
    "Bus 002 Device 003: ID 17e9:6006 DisplayLink Dell D3100 Docking Station\n"
    "Bus 001 Device 001: ID 1d6b:0002 Linux Foundation 2.0 root hub\n"
)
LSUSB_NO_DOCK = "Bus 001 Device 001: ID 1d6b:0002 Linux Foundation 2.0 root hub\n"
UBUNTU_OS_RELEASE = (
    'PRETTY_NAME="Ubuntu 24.04.1 LTS"\n'
    'NAME="Ubuntu"\n'
    'VERSION_ID="24.04"\n'
    "ID=ubuntu\n"
    "ID_LIKE=debian\n"
)
INSTALLER_NAME = "displaylink-driver-6.1.0-17.run"


class FakeSystem:
    """Replacement for subprocess.run used by the command wrapper.

    Records every argv. Responses are looked up by the longest matching argv
    prefix; without one, a small model of an Ubuntu host answers (wget writes
    the archive, unzip drops the vendor installer, dpkg-query reports
    packages from ``installed_packages``).
    """

    def __init__(self):
        self.calls = []
        self.kwargs = []
        self.responses = {}
        self.installed_packages = set()
        self.lsusb_output = LSUSB_WITH_DOCK
        self.extract_installer = True
        self.installer_rc = 0
        self.installer_handler = None

    def set(self, *prefix, rc=0, stdout="", stderr="", handler=None):
        self.responses[tuple(prefix)] = handler or (rc, stdout, stderr)

    def names(self):
        return [Path(argv[0]).name for argv in self.calls]

    def called(self, name):
        return [argv for argv in self.calls if Path(argv[0]).name == name]

    def __call__(self, argv, **kwargs):
        argv = list(argv)
        self.calls.append(argv)
        self.kwargs.append(kwargs)
        for n in range(len(argv), 0, -1):
            resp = self.responses.get(tuple(argv[:n]))
            if resp is None:
                continue
            if callable(resp):
                return resp(argv, kwargs)
            return self._result(kwargs, *resp)
        return self._default(argv, kwargs)

    @staticmethod
    def _result(kwargs, rc, stdout="", stderr=""):
        if kwargs.get("stdout") is None:
            stdout, stderr = None, None
        return SimpleNamespace(returncode=rc, stdout=stdout, stderr=stderr)

    def _default(self, argv, kwargs):
        name = Path(argv[0]).name
        if name == "wget":
            Path(argv[argv.index("-O") + 1]).write_bytes(b"PK\x03\x04 fake archive")
        elif name == "unzip":
            if self.extract_installer:
                dest = Path(argv[argv.index("-d") + 1]) / "DisplayLink USB Graphics Software for Ubuntu"
                dest.mkdir(parents=True, exist_ok=True)
                (dest / INSTALLER_NAME).write_text("#!/bin/sh\nexit 0\n", encoding="utf-8")
        elif name.endswith(".run"):
            if self.installer_handler is not None:
                return self.installer_handler(argv, kwargs)
            return self._result(kwargs, self.installer_rc)
        elif name == "dpkg-query":
            if argv[-1] in self.installed_packages:
                return self._result(kwargs, 0, "install ok installed")
            return self._result(kwargs, 1, "", f"dpkg-query: no packages found matching {argv[-1]}")
        elif name == "apt-cache":
            return self._result(kwargs, 100, "", "E: No packages found")
        elif name == "lsusb":
            return self._result(kwargs, 0, self.lsusb_output)
        elif name == "lsmod":
            return self._result(kwargs, 0, "Module                  Size  Used by\nsnd_hda_intel          61440  3\n")
        elif name == "systemctl":
            return self._result(kwargs, 0, "dlm.service disabled enabled\n")
        return self._result(kwargs, 0)


@pytest.fixture
def fake_system(monkeypatch):
    fake = FakeSystem()
    monkeypatch.setattr(command.subprocess, "run", fake)
    return fake


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    root = logging.getLogger()
    logging_utils._remove_our_handlers(root)
    if hasattr(root, "_displaylink_log_path"):
        delattr(root, "_displaylink_log_path")


@pytest.fixture
def host(tmp_path):
    """Filesystem layout of a fake host under tmp_path."""

    os_release = tmp_path / "etc" / "os-release"
    os_release.parent.mkdir(parents=True)
    os_release.write_text(UBUNTU_OS_RELEASE, encoding="utf-8")
    return SimpleNamespace(
        root=tmp_path,
        os_release=os_release,
        uninstaller=tmp_path / "usr" / "bin" / "displaylink-uninstall",
        stale_list=tmp_path / "etc" / "apt" / "sources.list.d" / "synaptics.list",
        work_dir=tmp_path / "work",
        log_path=tmp_path / "log" / "displaylink-installer.log",
    )


@pytest.fixture
def raw_config(host):
    return {
        "log_path": str(host.log_path),
        "os_release_path": str(host.os_release),
        "uninstaller_path": str(host.uninstaller),
        "stale_paths": [str(host.stale_list)],
        "work_dir": str(host.work_dir),
        "dependencies": ["dkms", "libdrm-dev", "unzip"],
    }


@pytest.fixture
def config(raw_config):
    return InstallerConfig(raw=raw_config)


@pytest.fixture
def make_ctx(config, host):
    def _make(mode=Mode.INSTALL, answers=(), privileged=True, cfg=None):
        invocation = InvocationContext(
            mode=mode,
            is_privileged=privileged,
            log_path=str(host.log_path),
            interactive=False,
        )
        return RunContext(
            invocation=invocation,
            config=cfg or config,
            prompter=ScriptedPrompter(answers),
        )

    return _make


@pytest.fixture
def mark_installed(host):
    def _mark():
        host.uninstaller.parent.mkdir(parents=True, exist_ok=True)
        host.uninstaller.write_text("#!/bin/sh\n", encoding="utf-8")

    return _mark
