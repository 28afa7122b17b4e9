"""
# Blamshot: Halo saved screenshots for humans.

A saved screenshot is a binary file where each piece of information lives
at a fixed offset, apart from the embedded image that has a variable length
and drags after itself a fixed footer.

The format is described declaratively by fields grouped in chunks and two
basic operations are defined for both:

 1. unpack(): read the binary data from the stream and build a high-level
    representation of that. Each field knows its absolute offset so it seeks
    there before reading: the order of the operations never matters.

 2. pack(): encode the high-level representation into binary data, again
    at the absolute offset of each field.

Fields that depend on each other (the size of the image and the image
itself) are tied by a Dependency so that changing one updates the other.

A container owning a stream can be in one of the following states

 1. UNINITIALIZED
 2. OPEN
 3. CLOSED

and once closed its stream can't be read nor written anymore, while the
values already unpacked stay available.

"""
