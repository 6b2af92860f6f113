"""mrgstream: splittable multiple recursive random number generators."""

__version__ = "0.1.0"

from mrgstream.config.defaults import default_generator_config as default_generator_config
from mrgstream.config.defaults import default_run_config as default_run_config
from mrgstream.config.schema import GeneratorConfig as GeneratorConfig
from mrgstream.config.schema import RunConfig as RunConfig
from mrgstream.config.schema import SampleConfig as SampleConfig
from mrgstream.config.schema import StreamConfig as StreamConfig
from mrgstream.core.engine import GeneratorState as GeneratorState
from mrgstream.core.engine import MRGEngine as MRGEngine
from mrgstream.core.engine import ParameterSet as ParameterSet
from mrgstream.core.engine import SplitResult as SplitResult
from mrgstream.core.engines import Mrg3s as Mrg3s
from mrgstream.core.engines import Mrg5s as Mrg5s
from mrgstream.core.engines import Yarn3s as Yarn3s
from mrgstream.core.engines import Yarn5s as Yarn5s
from mrgstream.core.rng import make_rng as make_rng
from mrgstream.core.streams import spawn_streams as spawn_streams
from mrgstream.core.uniform import produce_uniform as produce_uniform
