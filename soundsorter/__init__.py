from .engines import ALGORITHMS, sort
from .errors import InvalidAlgorithm, MoveIndexError, SoundSorterError
from .moves import Move, MoveLog, Overwrite, Swap, replay
from .playback import Playback, PlaybackEvent, PlaybackScheduler
from .tone import tone_frequency
from .visualizer import Visualizer, generate_array

__version__ = "1.0.0"
