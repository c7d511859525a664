from blockframe import AffineTransform, BlockRegistry, BlockState, MemoryExtent, TransformingExtent, remap
from blockframe import direction as d
from blockframe.registry import FACING, ROTATION
import timeit


if __name__ == "__main__":
    N = 100_000
    r = AffineTransform.rotate_y(90)
    remap(FACING, r, d.NORTH)  # warmup (numba compile)

    print("remap facing: ", timeit.timeit(lambda: remap(FACING, r, d.NORTH), number=N))
    print("remap rotation: ", timeit.timeit(lambda: remap(ROTATION, r, d.COMPASS_16[3]), number=N))

    registry = BlockRegistry()
    registry.register("minecraft:observer", [FACING])
    world = MemoryExtent((0, 0, 0), (15, 15, 15))
    rotated = TransformingExtent(world, r, registry)
    block = BlockState("minecraft:observer", {"facing": d.UP})
    stone = BlockState("minecraft:stone")

    print("set_block: ", timeit.timeit(lambda: rotated.set_block((1, 2, 3), block), number=N))
    print("get_block: ", timeit.timeit(lambda: rotated.get_block((1, 2, 3)), number=N))
    print("set_block unregistered: ", timeit.timeit(lambda: rotated.set_block((1, 2, 3), stone), number=N))
