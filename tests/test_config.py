"""
Tests for options validation and readdirp() argument checks.
"""

import os
from pathlib import Path

import pytest

from readdirp import (
    DEFAULT_DEPTH,
    EntryType,
    FilterEntryKey,
    InvalidArgumentError,
    InvalidFilterError,
    InvalidTypeError,
    ReaddirpOptions,
    ReaddirpStream,
    readdirp,
)
from readdirp.aio.core import fsio


class TestReaddirpOptions:
    """Defaults, normalization and validation of ReaddirpOptions."""

    def test_defaults(self):
        options = ReaddirpOptions()
        assert options.file_filter is None
        assert options.directory_filter is None
        assert options.filter_entry_key is FilterEntryKey.BASENAME
        assert options.type is EntryType.FILES
        assert options.lstat is False
        assert options.always_stat is False
        assert options.depth == DEFAULT_DEPTH
        assert options.suppress_normal_flow_error is True
        assert options.high_water_mark > 0

    def test_validate_normalizes_strings(self):
        options = ReaddirpOptions(type='all', filter_entry_key='path')
        options.validate()
        assert options.type is EntryType.ALL
        assert options.filter_entry_key is FilterEntryKey.PATH

    @pytest.mark.parametrize('value,files,dirs,everything', [
        ('files', True, False, False),
        ('directories', False, True, False),
        ('files_directories', True, True, False),
        ('all', True, True, True),
    ])
    def test_entry_type_flags(self, value, files, dirs, everything):
        entry_type = EntryType(value)
        assert entry_type.wants_files is files
        assert entry_type.wants_directories is dirs
        assert entry_type.wants_everything is everything

    def test_invalid_type(self):
        with pytest.raises(InvalidTypeError, match='Invalid type passed'):
            ReaddirpOptions(type='bogus').validate()

    def test_invalid_type_lists_choices(self):
        with pytest.raises(InvalidTypeError) as exc_info:
            ReaddirpOptions(type='bogus').validate()
        for choice in ('files', 'directories', 'files_directories', 'all'):
            assert choice in str(exc_info.value)

    def test_invalid_filter_entry_key(self):
        with pytest.raises(InvalidArgumentError, match='filter_entry_key'):
            ReaddirpOptions(filter_entry_key='fullPath').validate()

    @pytest.mark.parametrize('depth', [-1, 1.5, '2', True])
    def test_invalid_depth(self, depth):
        with pytest.raises(InvalidArgumentError, match='depth'):
            ReaddirpOptions(depth=depth).validate()

    def test_zero_depth_is_valid(self):
        ReaddirpOptions(depth=0).validate()

    @pytest.mark.parametrize('mark', [0, -5, 2.0])
    def test_invalid_high_water_mark(self, mark):
        with pytest.raises(InvalidArgumentError, match='high_water_mark'):
            ReaddirpOptions(high_water_mark=mark).validate()

    def test_from_kwargs_overrides_base(self):
        base = ReaddirpOptions(type='directories', depth=3)
        merged = ReaddirpOptions.from_kwargs(base, depth=1)
        assert merged.type is EntryType.DIRECTORIES
        assert merged.depth == 1
        # Base is left untouched
        assert base.depth == 3

    def test_from_kwargs_rejects_unknown_keys(self):
        with pytest.raises(InvalidArgumentError, match='fileFilter'):
            ReaddirpOptions.from_kwargs(fileFilter='*.js')

    def test_from_kwargs_rejects_non_options_base(self):
        with pytest.raises(InvalidArgumentError, match='ReaddirpOptions'):
            ReaddirpOptions.from_kwargs({'type': 'all'})

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            ReaddirpOptions(type='bogus').validate()


class TestReaddirpArguments:
    """readdirp() validates everything before any I/O."""

    def test_returns_stream(self, root):
        assert isinstance(readdirp(str(root)), ReaddirpStream)

    def test_missing_root(self):
        with pytest.raises(InvalidArgumentError, match='root argument is required'):
            readdirp(None)

    def test_empty_root(self):
        with pytest.raises(InvalidArgumentError, match='root argument is required'):
            readdirp('')

    @pytest.mark.parametrize('bad_root', [42, ['.'], b'.'])
    def test_non_string_root(self, bad_root):
        with pytest.raises(InvalidArgumentError, match='must be a string'):
            readdirp(bad_root)

    def test_old_api_rejected(self):
        with pytest.raises(InvalidArgumentError, match='Usage: readdirp'):
            readdirp({'root': '.'})

    def test_invalid_type(self, root):
        with pytest.raises(InvalidTypeError, match='Invalid type'):
            readdirp(str(root), type='bogus')

    def test_invalid_filter(self, root):
        with pytest.raises(InvalidFilterError):
            readdirp(str(root), file_filter=42)

    def test_invalid_directory_filter(self, root):
        with pytest.raises(InvalidFilterError):
            readdirp(str(root), directory_filter={'a': 1})

    def test_unknown_option(self, root):
        with pytest.raises(InvalidArgumentError):
            readdirp(str(root), highWaterMark=1)

    def test_pathlike_root(self, root):
        stream = readdirp(Path(root))
        assert stream.root == str(root)

    def test_relative_root_is_made_absolute(self, root, monkeypatch):
        monkeypatch.chdir(root.parent)
        stream = readdirp('root')
        assert stream.root == os.path.join(os.getcwd(), 'root')

    def test_options_object_and_kwargs(self, root):
        stream = readdirp(str(root), ReaddirpOptions(type='all'), depth=0)
        assert stream.options.type is EntryType.ALL
        assert stream.options.depth == 0

    def test_no_io_at_construction(self, monkeypatch, tmp_path):
        calls = []

        async def scandir(path):
            calls.append(path)
            return []

        monkeypatch.setattr(fsio, 'scandir', scandir)
        # Root need not exist until the stream is consumed
        readdirp(str(tmp_path / 'does-not-exist'))
        assert calls == []
