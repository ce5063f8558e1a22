"""
Copyright (C) 2012-2023, Leif Theden <leif.theden@gmail.com>

This file is part of tmxdecode.

tmxdecode is free software: you can redistribute it and/or modify
it under the terms of the GNU Lesser General Public License as
published by the Free Software Foundation, either version 3 of the
License, or (at your option) any later version.

tmxdecode is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
GNU Lesser General Public License for more details.

You should have received a copy of the GNU Lesser General Public
License along with tmxdecode.  If not, see <http://www.gnu.org/licenses/>.
"""
import logging

from .errors import *
from .gids import *
from .layerdata import *
from .properties import *
from .reader import *
from .wangid import *

logger = logging.getLogger(__name__)

__version__ = (1, 0)
__author__ = "bitcraft"
__author_email__ = "leif.theden@gmail.com"
__description__ = "Decoders for Tiled TMX layer data, properties and wang ids"
