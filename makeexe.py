"""
Programmatically call PyInstaller to build the executable
"""

import PyInstaller.__main__

PyInstaller.__main__.run([
    'wad2mesh.py',
    '--onefile',
    '-c',
    '-n', 'Wad2Mesh',
])
