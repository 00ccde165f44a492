# ecas

A small toolkit for running computations as an asynchronous graph of nodes.
Nodes are grouped onto worker threads and pass data to each other through
blocking queues of preallocated tensors. The package also has two CPU
operators (`dot`, `gemm`) and some utilities: a ring buffer, a frame-shift
cache, timers, BMP image reading and writing, and fast approximate
`exp`/`sqrt`.

It depends on numpy; tensor data is exposed as numpy arrays.

## Installation

```
pip install .
```

Use `pip install .[test]` to get the test requirements as well.

## Quick start

```python
from ecas.session import Session
from ecas.types import DataType, ExecutionMode, SessionConfig

config = SessionConfig(mode=ExecutionMode.SINGLE, num_thread=1)
session = Session("s1", config)

def double(usr, inputs, outputs):
    outputs[0].get_data()[...] = inputs[0].get_data() * 2

def total(usr, inputs, outputs):
    outputs[0].get_data()[0] = inputs[0].get_data().sum()

# Each dims entry is [data_type, dim0, dim1, ...].
session.create_node("n1", double, [[DataType.FP32, 4]], [[DataType.FP32, 4]], 0)
session.create_node("n2", total, [[DataType.FP32, 4]], [[DataType.FP32, 1]], 1)
session.build_graph([["n1", "n2"]])
session.show_info()

tensor_in = session.create_tensor([4], DataType.FP32)
tensor_out = session.create_tensor([1], DataType.FP32)

session.start(None)
tensor_in.get_data()[:] = 1
tensor_in.id = 0
session.graph_feed(tensor_in)
session.graph_get_result(tensor_out)
print(tensor_out.id, tensor_out.get_data()[0])  # 0 8.0
session.stop()
```

How the graph works:

- `build_graph` takes chains of node names; each consecutive pair is an edge.
  There must be exactly one node with no inputs (the graph input) and one with
  no outputs (the graph output). Nodes that appear in no chain are left out.
- The input dims of a node must match one of the output dims of each node
  feeding it, otherwise `build_graph` raises `ecas.logger.EcasError`.
- Every edge, and the graph's input and output, gets a queue pair of ten
  tensors. `graph_feed` blocks while no slot is free; `graph_get_result`
  blocks until a result is ready. The id of a fed tensor is carried through
  to its result.
- Nodes with the same group id (0 to 9) run one after another on the same
  thread. Each non-empty group gets its own thread.
- The object passed to `start` is handed to every task as `usr`.

## Operators

Operators are created by name through the session. The registered names are
`dot` and `gemm`:

```python
a = session.create_tensor([2, 3], DataType.FP32)
b = session.create_tensor([3, 4], DataType.FP32)
c = session.create_tensor([2, 4], DataType.FP32)
a.get_data()[...] = 1
b.get_data()[...] = 1

gemm = session.create_op("gemm", "alpha: 1.0, beta: 2.0")
session.op_run(gemm, [], [a, b], [c])   # c = alpha * a @ b
```

`gemm` reads `alpha` and `beta` from its parameter string; only `alpha` is
used in the computation. `dot` writes the inner product of its two input
vectors into a one-element output. An unknown name raises
`ecas.op_factory.UnknownOperatorError`. More operators can be added with
`get_op_factory().register_op_class(name, creator)`.

The plain kernels are also available as `ecas.kernels.dot` and
`ecas.kernels.gemm`.

## Utilities

- `ecas.ring_buffer.RingBuffer`: a thread-safe byte ring buffer with
  `write`, `read`, `skip`, `payload_size`, `free_size` and `reset`. Reads and
  writes block by default; with `blocking=False` they fail at once instead.
- `ecas.frame_shift_cache.FrameShiftCache`: cuts a byte stream into
  overlapping frames when the frame length differs from the frame shift.
  Push data, and while `is_ready()` use `data()` and then `pop()`.
- `ecas.blocking_queue.BlockingQueue`: a FIFO whose `wait_and_pop` blocks;
  after `exit()` it raises `QueueExited`.
- `ecas.timer.Timer` keeps count, min, max and mean timings per slot and can
  report them every `print_interval` measurements; `ecas.timer.CpuTimer` is
  also a context manager. `ecas.session.UtilBox` creates and drives timers.
- `ecas.internal_thread.InternalThread`: subclass it, override `entry`, and
  poll `must_stop()` in it.
- `ecas.bmp.BmpImage` reads and writes uncompressed bottom-up 24- and 32-bit
  BMP files; `BmpImage.blank(width, height, channels)` makes an empty one.
- `ecas.session.Math.expf` and `Math.sqrtf` (also `ecas.fastmath`) are fast
  single-precision approximations.
- `ecas.logger` writes leveled messages to standard error;
  `set_min_log_level` drops lower levels, and an error message raises
  `EcasError`.

## Demo

The demo builds a four-node graph (transpose and split, two matrix
multiplications, a final dot product), feeds it five frames, then runs the
same work serially on the calling thread and prints the results and timings:

```
ecas-demo
```

## What it does not do

- Everything runs on the CPU. `ecas.gpu_kernels` only describes the launch
  parameters of a few GPU compute kernels (descriptor types, specialization
  constants, workgroup sizes); nothing in the package executes them.
- Tensors live in host memory only; `MemoryMode.ON_DEVICE` is not backed by
  any device memory.
- A `CompositeNode` records its chains of names but cannot be run; calling
  its `run` raises `EcasError`.