"""Tests for the converter and its command line."""

import json

import pytest

from diedrico.config import PROGRESS_PREFIX
from diedrico.converter import ViewConverter, load_views, main
from diedrico.errors import DiedricoError
from diedrico.projection import project


class TestViewConverter:
    def test_from_level(self):
        converter = ViewConverter.from_level(7)
        assert converter.name == '07 Pozo'
        assert converter.resolution == 4
        assert converter.get_projection('top') == converter.projections.top

    def test_hull_of_a_box_is_the_box(self):
        converter = ViewConverter.from_level(1)
        assert {c[:3] for c in converter.hull()} == {c[:3] for c in converter.cells}

    def test_from_views(self, bar_views):
        converter = ViewConverter.from_views(bar_views)
        assert len(converter.cells) == 2
        assert converter.projections == bar_views

    def test_default_output_name(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        path = ViewConverter.from_level(1).convert('svg')
        assert path.name == '01_el_cubo.svg'
        assert (tmp_path / path).exists()

    def test_surface_output(self, tmp_path):
        path = ViewConverter.from_level(3).convert('stl', tmp_path / 'gusano.stl')
        assert path.stat().st_size > 0

    def test_unsupported_format(self, tmp_path):
        with pytest.raises(DiedricoError):
            ViewConverter.from_level(1).convert('pdf', tmp_path / 'x.pdf')

    def test_empty_solid_has_no_surface(self, tmp_path):
        with pytest.raises(DiedricoError):
            ViewConverter([], 4).convert('glb', tmp_path / 'empty.glb')


def test_load_views(tmp_path, bar_views):
    path = tmp_path / 'views.json'
    data = dict(bar_views.to_dict(), resolution=2)
    path.write_text(json.dumps(data), encoding='utf-8')
    assert load_views(path) == bar_views


@pytest.mark.parametrize('content', [
    '{"resolution": 2, "front": ',
    '{"resolution": 2, "front": {"cells": [0, 0, 1, 1]}}',
    '{"resolution": 2, "front": {"cells": [9, 0, 0, 0]}, "top": {"cells": [0, 0, 0, 0]}, '
    '"side": {"cells": [0, 0, 0, 0]}}',
    '[1, 2, 3]',
])
def test_load_views_rejects_malformed_files(tmp_path, content):
    path = tmp_path / 'views.json'
    path.write_text(content, encoding='utf-8')
    with pytest.raises(DiedricoError):
        load_views(path)


class TestCommandLine:
    def test_levels(self, capsys):
        main(['levels'])
        out = capsys.readouterr().out
        assert 'El Cubo' in out
        assert len(out.strip().splitlines()) == 30

    @pytest.mark.parametrize('fmt', ['svg', 'dxf'])
    def test_project(self, tmp_path, capsys, fmt):
        output = tmp_path / f'pozo.{fmt}'
        main(['project', '7', '-f', fmt, '-o', str(output)])
        assert output.exists()
        assert 'Conversion complete' in capsys.readouterr().out

    def test_reconstruct(self, tmp_path, capsys, bar_cells):
        path = tmp_path / 'bar.json'
        data = dict(project(bar_cells, 2).to_dict(), resolution=2)
        path.write_text(json.dumps(data), encoding='utf-8')
        main(['reconstruct', str(path), '-f', 'ply'])
        assert (tmp_path / 'bar.ply').exists()
        assert 'phantom' in capsys.readouterr().out

    def test_reconstruct_malformed_file(self, tmp_path, capsys):
        path = tmp_path / 'broken.json'
        path.write_text('{"resolution": 2', encoding='utf-8')
        with pytest.raises(SystemExit) as exc:
            main(['reconstruct', str(path)])
        assert exc.value.code == 1
        assert '[!] Error' in capsys.readouterr().out

    def test_reconstruct_missing_file(self, tmp_path):
        with pytest.raises(SystemExit) as exc:
            main(['reconstruct', str(tmp_path / 'missing.json')])
        assert exc.value.code == 1

    def test_progress_round_trip(self, capsys):
        main(['progress', 'Ana', '3', '1'])
        code = capsys.readouterr().out.strip()
        assert code.startswith(PROGRESS_PREFIX)

        main(['verify', code])
        out = capsys.readouterr().out
        assert 'Ana' in out
        assert '[1, 3]' in out

    def test_verify_bad_code(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(['verify', 'bad'])
        assert exc.value.code == 1
        assert '[!] Error' in capsys.readouterr().out

    def test_check_dxf(self, tmp_path, capsys):
        output = tmp_path / 'cubo.dxf'
        main(['project', '1', '-f', 'dxf', '-o', str(output)])
        capsys.readouterr()
        main(['check-dxf', str(output)])
        assert 'Layer FILL: 12' in capsys.readouterr().out
