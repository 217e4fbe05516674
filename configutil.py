"""
Utility class for arguments and config file parsing.
"""

from typing import Optional, List, Self, Final, Sequence
import argparse
import configparser
import dataclasses
from pathlib import Path


VERSION = '1.0.0'
IMAGE_FORMATS: Final[tuple[str, ...]] = ('png', 'bmp')


@dataclasses.dataclass
class Args:
    """To help with typing"""
    input:        Optional[str] = None
    output:       Optional[str] = None
    map:          Optional[List[str]] = None
    textures:     bool = False
    flats:        bool = False
    format:       Optional[str] = None
    autoexit:     bool = False

    @classmethod
    def from_dict(cls, d: dict) -> Self:
        fields: List[str] = [f.name for f in dataclasses.fields(cls)]
        new_d = {}
        for key, value in d.items():
            if key in fields:
                new_d[key] = value
        return cls(**new_d)


class ConfigUtil:
    def __init__(self, filepath: Path, argv: Optional[Sequence[str]] = None) -> None:
        self.filepath = filepath

        self._input:            Optional[str] = None
        self._output:           Path = Path('.')
        self._debug:            bool = False
        self._maps:             List[str] = []
        self._extract_textures: bool = False
        self._extract_flats:    bool = False
        self._image_format:     str = 'png'
        self._autoexit:         bool = False

        self.load_configini()
        self.argparser = argparse.ArgumentParser(
            prog='Wad2Mesh',
            description='Reads the maps, textures and flats of a Doom .wad '\
                'and builds floor, ceiling and wall meshes for every map.',
            exit_on_error=False
        )
        self.load_args(argv)
        self.read_configs()

    def load_configini(self) -> None:
        self.configini = configparser.ConfigParser(default_section='default')
        if self.filepath.exists():
            self.configini.read(self.filepath)
        else:
            self.create_default_config()
            with self.filepath.open('w') as configfile:
                self.configini.write(configfile)

    def load_args(self, argv: Optional[Sequence[str]]) -> None:
        self.argparser.add_argument('input', nargs='?', type=str,
                                    help='.wad file to convert')
        self.argparser.add_argument(
            '-v', '--version', action='version', version=f"%(prog)s {VERSION}",
            help='display current version')
        self.argparser.add_argument(
            '-x', '--autoexit', action='store_true',
            help='don\'t ask for input after finish')

        general = self.argparser.add_argument_group('general arguments')
        general.add_argument(
            '-o', '--output', type=str, metavar='',
            help='specify an output directory')
        general.add_argument(
            '-m', '--map', type=str, action='append', metavar='',
            help='only import this map, e.g. E1M1 or MAP01 (repeatable)')

        images = self.argparser.add_argument_group('image options')
        images.add_argument(
            '-t', '--textures', action='store_true',
            help='extract composited wall textures')
        images.add_argument(
            '-f', '--flats', action='store_true',
            help='extract floor and ceiling flats')
        images.add_argument(
            '--format', type=str, choices=IMAGE_FORMATS, metavar='',
            help='image format for extracted images (png or bmp)')

        self.args = Args.from_dict(vars(self.argparser.parse_args(argv)))

    def read_configs(self) -> None:
        """Make sure we read configs and args in the correct order.
        CLI args should be prioritised over config.ini settings."""

        configini = self.configini['default']

        self._input = self.args.input

        if self.args.output:
            self._output = Path(self.args.output)
        else:
            self._output = Path(configini.get('output directory', '.'))

        self._debug = configini.getboolean('debug', False)

        if self.args.map:
            self._maps = [m.upper() for m in self.args.map]
        else:
            self._maps = [m.strip().upper() for m in configini.get('maps', '')
                          .replace("\n", '').split(',') if m.strip()]

        self._extract_textures = self.args.textures or configini.getboolean('extract textures', False)
        self._extract_flats = self.args.flats or configini.getboolean('extract flats', False)

        if self.args.format:
            self._image_format = self.args.format
        else:
            self._image_format = configini.get('image format', 'png').strip().lower()
        if self._image_format not in IMAGE_FORMATS:
            raise ValueError(f"Invalid image format '{self._image_format}', "\
                             f"must be one of {', '.join(IMAGE_FORMATS)}")

        self._autoexit = self.args.autoexit or configini.getboolean('autoexit', False)

    @property
    def input(self) -> Optional[str]: return self._input
    @property
    def output_dir(self) -> Path: return self._output
    @property
    def debug(self) -> bool: return self._debug
    @property
    def maps(self) -> List[str]: return self._maps
    @property
    def extract_textures(self) -> bool: return self._extract_textures
    @property
    def extract_flats(self) -> bool: return self._extract_flats
    @property
    def image_format(self) -> str: return self._image_format
    @property
    def autoexit(self) -> bool: return self._autoexit

    def create_default_config(self):
        self.configini['default'] = {
            'output directory': 'converted',
            'image format': 'png',
            'extract textures': 'no',
            'extract flats': 'no',
            'maps': '',
            'autoexit': 'no',
            'debug': 'no',
        }
