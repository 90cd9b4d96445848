"""Integration tests for end-to-end rendering."""

import os
import subprocess
import sys
from pathlib import Path

import pytest

from gott import build_context, build_default_renderer

SRC_DIR = Path(__file__).resolve().parents[2] / "src"


class TestRealisticScenarios:
    """Render realistic templates from typed definitions."""

    def test_config_file_from_json_and_env(self, tmp_path, monkeypatch):
        """Deployment config assembled from a JSON file, env and literals."""
        settings = tmp_path / "settings.json"
        settings.write_text(
            '{"servers": [{"host": "a.local", "port": 80, "enabled": true},'
            ' {"host": "b.local", "port": 81, "enabled": false}]}',
            encoding="utf-8",
        )
        monkeypatch.setenv("IS_RELEASE", "1")

        context = build_context([
            f"settings:json:file={settings}",
            "IsRelease:bool:env=IS_RELEASE",
            "workers:int=4",
            "app=shop",
        ])

        template = (
            "app={{ app }} mode={{ 'release' if IsRelease else 'debug' }}\n"
            "{% for s in settings | jmespath('servers[?enabled]') %}"
            "upstream {{ s.host }}:{{ s.port }} workers={{ workers * 2 }}\n"
            "{% endfor %}"
        )

        result = build_default_renderer().render(template, context)

        assert result == "app=shop mode=release\nupstream a.local:80 workers=8\n"

    def test_template_text_loaded_through_file_type(self, tmp_path):
        """A file-typed variable can hold a fragment rendered verbatim."""
        fragment = tmp_path / "banner.txt"
        fragment.write_text("== banner ==", encoding="utf-8")

        context = build_context([f"banner:file={fragment}", "version=v2.0.1"])
        result = build_default_renderer().render(
            "{{ banner }} {{ version | regex_replace('^v', '') }}", context
        )

        assert result == "== banner == 2.0.1"


class TestCommandLine:
    """Run ``python -m gott`` as a subprocess."""

    def _run(self, args, stdin=b"", env=None):
        full_env = dict(os.environ)
        full_env["PYTHONPATH"] = os.pathsep.join(
            p for p in (str(SRC_DIR), full_env.get("PYTHONPATH", "")) if p
        )
        if env:
            full_env.update(env)
        return subprocess.run(
            [sys.executable, "-m", "gott", *args],
            input=stdin,
            capture_output=True,
            env=full_env,
            timeout=60,
        )

    @pytest.mark.parametrize("flag, expected", [("true", b"YES"), ("false", b"NO")])
    def test_flag(self, flag, expected):
        proc = self._run(
            ["-d", f"Flag:bool={flag}"],
            stdin=b"{% if Flag %}YES{% else %}NO{% endif %}",
        )

        assert proc.returncode == 0
        assert proc.stdout == expected
        assert proc.stderr == b""

    def test_failure_exit_status(self):
        proc = self._run(["-d", "novalue"], stdin=b"{{ x }}")

        assert proc.returncode == 1
        assert proc.stdout == b""
        assert proc.stderr.decode("utf-8").startswith("gott: error parsing variable definition 'novalue'")
        assert proc.stderr.count(b"\n") == 1

    def test_env_chain(self, tmp_path):
        output = tmp_path / "out.txt"

        proc = self._run(
            ["-o", str(output), "-d", "IsRelease:bool:env=IS_RELEASE"],
            stdin=b"{% if IsRelease %}RELEASE{% else %}DEBUG{% endif %}\n",
            env={"IS_RELEASE": "true"},
        )

        assert proc.returncode == 0
        assert output.read_text(encoding="utf-8") == "RELEASE\n"
