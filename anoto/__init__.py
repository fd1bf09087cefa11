"""anoto -- absolute-position dot pattern codec.

Every grid point of the pattern carries one of four directional markings.
Any 6x6 block of markings identifies the absolute position of its corner:
the horizontal and vertical displacement bits each follow a periodic
binary sequence in which every 6-symbol window occurs once per period.

Typical use:

    from anoto.codec import anoto_6x6_a4_fixed

    codec = anoto_6x6_a4_fixed()
    page = codec.generate_matrix(81, 56, sect_u=10, sect_v=10)
    codec.decode_position(page[:6, :6])  # -> (10, 10)
"""
