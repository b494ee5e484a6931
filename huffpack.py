#!/usr/bin/env python3
import sys
import heapq
import itertools

from bitarray import bitarray, frozenbitarray
from collections import Counter, namedtuple

class HuffmanError(ValueError):
  pass

class EmptyInputError(HuffmanError):
  def __init__(self):
    super().__init__('cannot build a tree over zero symbols')

class UnknownSymbolError(HuffmanError):
  def __init__(self, byte):
    super().__init__('byte ({}) not found in table'.format(byte))
    self.byte = byte

class TruncatedEncodingError(HuffmanError):
  pass

Leaf = namedtuple('Leaf', ('byte', 'count'))
Node = namedtuple('Node', ('left', 'right', 'count'))

# data is MSB-first within each byte; bits past bit_length are padding
Encoding = namedtuple('Encoding', ('data', 'bit_length'))

class BinPacker:
  def __init__(self):
    self.buffer = bitarray(endian='big')

  def bits(self, bits):
    self.buffer.extend(bits)

  def pack(self):
    return Encoding(data=self.buffer.tobytes(), bit_length=len(self.buffer))

  def debug(self):
    print(self.buffer)

    packed = self.pack()
    print('Packed bits ({}) in {} bytes: "{}"'.format(packed.bit_length, len(packed.data), packed.data))

class BinUnpacker:
  def __init__(self, encoding):
    data, bit_length = encoding

    if bit_length < 0:
      raise HuffmanError('bit_length must be non-negative, got {}'.format(bit_length))
    if bit_length > len(data) * 8:
      raise TruncatedEncodingError(
        'bit_length {} exceeds the {} bits held in {} bytes'.format(bit_length, len(data) * 8, len(data)))

    self.buffer = bitarray(endian='big')
    self.buffer.frombytes(bytes(data))
    del self.buffer[bit_length:]

  def __iter__(self):
    return iter(self.buffer)

  def __len__(self):
    return len(self.buffer)

def to_bytes(data):
  if isinstance(data, str):
    return data.encode('utf8')
  if isinstance(data, int):
    raise TypeError('expected bytes or str, got int')
  return bytes(memoryview(data))

def count_bytes(data):
  return Counter(to_bytes(data))

def build(data):
  return build_tree(count_bytes(data))

def build_tree(frequencies):
  # equal counts pop in heap-entry order: leaves by byte, then merges as created
  sequence = itertools.count()
  heap = [(count, next(sequence), Leaf(byte=byte, count=count))
          for byte, count in sorted(frequencies.items()) if count > 0]

  if not heap:
    raise EmptyInputError()

  heapq.heapify(heap)

  while len(heap) > 1:
    _, _, left = heapq.heappop(heap)
    _, _, right = heapq.heappop(heap)

    parent = Node(left=left, right=right, count=left.count + right.count)
    heapq.heappush(heap, (parent.count, next(sequence), parent))

  return heap[0][2]

def build_table(tree):
  # a lone leaf has no edge to follow, so it is given the one-bit code 0
  if isinstance(tree, Leaf):
    return {tree.byte: frozenbitarray('0', endian='big')}

  table = {}
  path = bitarray(endian='big')

  def explore(node):
    if isinstance(node, Leaf):
      table[node.byte] = frozenbitarray(path)
      return

    path.append(0)
    explore(node.left)
    path.pop()

    path.append(1)
    explore(node.right)
    path.pop()

  explore(tree)
  return table

def look_up_byte(table, byte):
  bits = table.get(byte)
  if bits is None:
    raise UnknownSymbolError(byte)
  return bits

def encode(tree, data, table=None):
  if table is None:
    table = build_table(tree)

  packer = BinPacker()

  for byte in to_bytes(data):
    packer.bits(look_up_byte(table, byte))

  return packer.pack()

def follow(branch, bit):
  if isinstance(branch, Leaf):
    # single-symbol tree: only the 0 edge exists
    if bit:
      return None
    return branch

  return branch.right if bit else branch.left

def decode(tree, encoding):
  unpacker = BinUnpacker(encoding)

  out = bytearray()
  branch = tree

  for offset, bit in enumerate(unpacker):
    branch = follow(branch, bit)

    if branch is None:
      raise TruncatedEncodingError('bit {} has no branch in this tree'.format(offset))

    if isinstance(branch, Leaf):
      out.append(branch.byte)
      branch = tree

  if branch is not tree:
    raise TruncatedEncodingError(
      'encoding ended mid-code after {} bits'.format(len(unpacker)))

  return bytes(out)

def leaves(tree):
  if isinstance(tree, Leaf):
    yield tree, 0
    return

  stack = [(tree, 0)]
  while stack:
    node, depth = stack.pop()
    if isinstance(node, Leaf):
      yield node, depth
    else:
      stack.append((node.right, depth + 1))
      stack.append((node.left, depth + 1))

def tree_shape(tree):
  leaf_count = sum(1 for _ in leaves(tree))
  return leaf_count, leaf_count - 1

def weighted_length(tree):
  # bits needed to encode the training input
  return sum(leaf.count * max(depth, 1) for leaf, depth in leaves(tree))

special_ascii = {0: 'NULL', 9: 'TAB', 10: 'LF', 13: 'CR', 32: 'SP', 127: 'DEL'}
def disp_char(byte):
  if 32 < byte < 127:
    return chr(byte)
  return special_ascii.get(byte, '')

def format_table(tree):
  table = build_table(tree)
  counts = dict((leaf.byte, leaf.count) for leaf, _ in leaves(tree))

  rows = [' byte  char   count  code', 40 * '-']
  for byte in sorted(table, key=lambda b: (-counts[b], b)):
    rows.append(' 0x{:02x}  {:<5} {:6d}  {}'.format(byte, disp_char(byte), counts[byte], table[byte].to01()))
  return '\n'.join(rows)

class Huffman:
  # tree is read-only after __init__
  def __init__(self, training):
    self.tree = build(training)
    self._table = None

  @property
  def table(self):
    if self._table is None:
      self._table = build_table(self.tree)
    return self._table

  def encode(self, data):
    return encode(self.tree, data, table=self.table)

  def decode(self, encoding):
    return decode(self.tree, encoding)

SAMPLE = b'testing!'

def read_input(args):
  if args:
    return to_bytes(' '.join(args))
  if not sys.stdin.isatty():
    data = sys.stdin.buffer.read()
    if data:
      return data
  return SAMPLE

def roundtrip(original):
  huffman = Huffman(original)
  encoded = huffman.encode(original)
  decoded = huffman.decode(encoded)

  print('bytes:  {}'.format(len(original)))
  print('bits:   {}'.format(encoded.bit_length))
  print('packed: {}'.format(len(encoded.data)))
  print('ratio:  {:.2f}%'.format(100.0 * len(encoded.data) / len(original)))

  if decoded != original:
    print('round trip mismatch', file=sys.stderr)
    return 1
  return 0

def main(argv=None):
  args = sys.argv[1:] if argv is None else list(argv)

  mode = 'roundtrip'
  if args and args[0] in ('roundtrip', 'table'):
    mode = args.pop(0)

  try:
    original = read_input(args)
    if mode == 'table':
      print(format_table(build(original)))
      return 0
    return roundtrip(original)
  except HuffmanError as e:
    print('Error: {}'.format(e), file=sys.stderr)
    return 1

if __name__ == '__main__':
  sys.exit(main())
