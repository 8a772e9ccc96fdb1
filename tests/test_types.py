from java_transform.TypeSubstitution import TypeSubstitution
from java_transform.TransformedUnit import TransformedUnit

SPSC_COLD_FIELD = """\
abstract class SpscArrayQueueColdField<E> extends ConcurrentCircularArrayQueue<E>
{
    protected final E[] buffer;
    protected final long mask;
    private final long[] sBuffer;
    final long lookAheadStep;
    private final E[] spare;

    SpscArrayQueueColdField(int capacity, E[] buffer, long mask)
    {
        super(capacity);
        this.buffer = buffer;
        this.mask = mask;
        this.sBuffer = new long[capacity];
        this.spare = null;
    }

    static long calcElementOffset(long index, long mask)
    {
        long offset = index & mask;
        for (long seqOffset = 0; seqOffset < mask; seqOffset++)
        {
            offset += seqOffset;
        }
        return offset;
    }
}
"""


def _only_types(source, rules):
    unit = TransformedUnit("Test.java", source)
    [r for r in rules if isinstance(r, TypeSubstitution)][0].run(unit, False)
    return unit.get_modified_content()


def test_array_family_field_types(array_rules):
    out = _only_types(SPSC_COLD_FIELD, array_rules)

    assert "    protected final AtomicReferenceArray<E> buffer;" in out
    assert "    protected final int mask;" in out
    assert "    private final AtomicLongArray sBuffer;" in out
    # Names not following the conventions are left alone
    assert "    final long lookAheadStep;" in out
    assert "    private final E[] spare;" in out


def test_array_family_parameter_and_local_types(array_rules):
    out = _only_types(SPSC_COLD_FIELD, array_rules)

    assert "SpscArrayQueueColdField(int capacity, AtomicReferenceArray<E> buffer, int mask)" in out
    assert "static long calcElementOffset(long index, int mask)" in out
    assert "        int offset = index & mask;" in out
    assert "for (int seqOffset = 0; seqOffset < mask; seqOffset++)" in out


def test_array_family_parents(transform, array_rules):
    out = transform(SPSC_COLD_FIELD, array_rules)
    assert "abstract class SpscAtomicArrayQueueColdField<E> extends AtomicReferenceArrayQueue<E>" in out

    sequenced = """\
public class MpmcArrayQueue<E> extends ConcurrentSequencedCircularArrayQueue<E> implements QueueProgressIndicators
{
}
"""
    out = transform(sequenced, array_rules)
    assert (
        "public class MpmcAtomicArrayQueue<E> extends SequencedAtomicReferenceArrayQueue<E> "
        "implements QueueProgressIndicators"
    ) in out


LINKED_ARRAY_QUEUE = """\
abstract class BaseMpscLinkedArrayQueue<E> extends BaseMpscLinkedArrayQueueColdProducerFields<E>
    implements MessagePassingQueue<E>
{
    protected E[] consumerBuffer;

    private E[] newBufferAndOffset(long index)
    {
        return null;
    }

    private long nextArrayOffset(final long mask)
    {
        return mask + 1;
    }

    private void linkOldToNew(long currIndex, E[] oldBuffer, long offset, E[] newBuffer, long offsetInNew, E e)
    {
        long offsetInOld = offset;
        Object next = newBuffer;
        E[] nextBuffer = (E[]) next;
        LinkedQueueNode<E> node = new LinkedQueueNode<E>(e);
        LinkedQueueNode<E> other = (LinkedQueueNode<E>) null;
        int length = BaseMpscLinkedArrayQueue.JUMP;
        for (E value : oldBuffer)
        {
        }
    }
}
"""


def test_linked_family_types(linked_rules):
    out = _only_types(LINKED_ARRAY_QUEUE, linked_rules)

    # Any E[] becomes an atomic array in the linked family
    assert "    protected AtomicReferenceArray<E> consumerBuffer;" in out
    # Methods returning offsets return ints
    assert "    private int newBufferAndOffset(long index)" in out
    assert "    private int nextArrayOffset(final long mask)" in out
    assert (
        "linkOldToNew(long currIndex, AtomicReferenceArray<E> oldBuffer, int offset, "
        "AtomicReferenceArray<E> newBuffer, int offsetInNew, E e)"
    ) in out
    assert "        int offsetInOld = offset;" in out
    assert "        AtomicReferenceArray<E> nextBuffer = (AtomicReferenceArray<E>) next;" in out
    assert "        LinkedQueueAtomicNode<E> node = new LinkedQueueAtomicNode<E>(e);" in out
    assert "        LinkedQueueAtomicNode<E> other = (LinkedQueueAtomicNode<E>) null;" in out


def test_linked_family_names(transform, linked_rules):
    out = transform(LINKED_ARRAY_QUEUE, linked_rules)

    assert "abstract class BaseMpscLinkedAtomicArrayQueue<E> extends BaseMpscLinkedAtomicArrayQueueColdProducerFields<E>" in out
    # Interfaces are parents too, but they don't match the naming rules
    assert "    implements MessagePassingQueue<E>" in out
    # Qualified field accesses follow the class rename
    assert "int length = BaseMpscLinkedAtomicArrayQueue.JUMP;" in out


def test_linked_raw_node_gets_element_type(linked_rules):
    source = """\
class SpscLinkedQueue<E>
{
    private LinkedQueueNode head;
}
"""
    out = _only_types(source, linked_rules)
    assert "    private LinkedQueueAtomicNode<E> head;" in out


def test_casts_follow_class_renames(array_rules, linked_rules):
    source = """\
class SpscArrayQueue<E>
{
    boolean same(Object o)
    {
        SpscArrayQueue<E> other = (SpscArrayQueue<E>) o;
        return ((MessagePassingQueue<E>) other) == this;
    }
}
"""
    out = _only_types(source, array_rules)
    assert "        SpscArrayQueue<E> other = (SpscAtomicArrayQueue<E>) o;\n" in out
    assert "((MessagePassingQueue<E>) other)" in out

    out = _only_types(source.replace("SpscArrayQueue", "MpscLinkedQueue"), linked_rules)
    assert "(MpscLinkedAtomicQueue<E>) o;" in out
