"""
Stand-ins for the moderngl objects the render package touches, so buffer
bookkeeping can be tested without a GL context.
"""

import pytest


class FakeBuffer:
    def __init__(self, data=None, reserve=0):
        self.data = bytearray(data) if data is not None else bytearray(reserve)
        self.released = False
        self.bound_storage = []
        self.bound_uniform = []

    @property
    def size(self):
        return len(self.data)

    def write(self, data, offset=0):
        assert not self.released, "write to a released buffer"
        data = bytes(data)
        if offset + len(data) > len(self.data):
            raise ValueError("write out of bounds")
        self.data[offset:offset + len(data)] = data

    def read(self):
        return bytes(self.data)

    def release(self):
        self.released = True

    def bind_to_storage_buffer(self, binding=0, offset=0, size=-1):
        assert not self.released, "bind of a released buffer"
        self.bound_storage.append(binding)

    def bind_to_uniform_block(self, binding=0, offset=0, size=-1):
        self.bound_uniform.append(binding)


class FakeUniform:
    value = None


class FakeProgram:
    def __init__(self, source=None):
        self.source = source
        self.runs = []
        self.uniforms = {}
        self.released = False

    def __getitem__(self, name):
        return self.uniforms.setdefault(name, FakeUniform())

    def run(self, group_x=1, group_y=1, group_z=1):
        self.runs.append((group_x, group_y, group_z))

    def release(self):
        self.released = True


class FakeVertexArray:
    def __init__(self):
        self.renders = 0
        self.released = False

    def render(self, mode=None):
        self.renders += 1

    def release(self):
        self.released = True


class FakeTexture:
    def __init__(self, size):
        self.size = size
        self.filter = None
        self.image_bindings = []
        self.released = False

    def bind_to_image(self, unit, read=True, write=True):
        self.image_bindings.append((unit, read, write))

    def use(self, location=0):
        pass

    def release(self):
        self.released = True


class FakeContext:
    def __init__(self):
        self.buffers = []
        self.textures = []
        self.barriers = 0

    def buffer(self, data=None, reserve=0, dynamic=False):
        buf = FakeBuffer(data=data, reserve=reserve)
        self.buffers.append(buf)
        return buf

    def compute_shader(self, source):
        return FakeProgram(source)

    def program(self, vertex_shader=None, fragment_shader=None):
        return FakeProgram(fragment_shader)

    def vertex_array(self, program, content):
        return FakeVertexArray()

    def texture(self, size, components, data=None, dtype="f1"):
        tex = FakeTexture(tuple(size))
        self.textures.append(tex)
        return tex

    def memory_barrier(self, barriers=None, by_region=False):
        self.barriers += 1


@pytest.fixture
def ctx():
    return FakeContext()
