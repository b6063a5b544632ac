# osprojects

Two command-line programs and the data structures behind them.

## Election registry

`runelection` reads a registry of voters, one per line:

```
ID NAME SURNAME AGE SEX POSTCODE
```

Voters whose ID is already in the registry are skipped with a message on
standard error. The program then reads commands from standard input, one
per line.

```
runelection -i registry.txt -o out.txt [-n numofupdates]
```

`-n` defaults to 5. It sets how many updates (insertions into the Bloom
filter and deletions) may happen before the filter is rebuilt from the
registry.

| Command | Effect |
|---|---|
| `lbf key` | look the key up in the Bloom filter |
| `lrb key` | look the key up in the red-black tree |
| `ins record` | add a voter record |
| `find key` | print a voter's record |
| `delete key` | remove a voter |
| `vote key` | mark a voter as having voted |
| `load fileofkeys` | vote for the key at the start of every line of a file |
| `voted [postcode]` | count the voters who have voted, in total or in one postcode |
| `votedperpc` | print the turnout of every postcode, in order of code |
| `exit` | write the output file and quit |

On `exit`, every voter is written to the output file in order of ID as
`ID SURNAME NAME AGE SEX POSTCODE`. If standard input ends before `exit`,
the output file is written all the same.

The building blocks live in `osprojects.elections`:

- `bloom.BloomFilter`: a Bloom filter over three hash functions
- `connlist.ConnList`: a list in insertion or descending key order
- `rbt.RedBlackTree`: a red-black tree with unique keys
- `voter.parse_voter`: parse a registry line
- `votersrbt.VotersTree`, `postalcodes.PostalCodes`,
  `votersbloom.VotersBloomFilter`
- `commands.Registry`: every command as a method that returns its output
  lines

## Fork sort

`mysort` sorts a binary file of fixed-size customer records.

```
mysort -f inputfile -h|q [columnid] [-h|q [columnid] ...]
```

- `-h` sorts with heapsort, `-q` with quicksort.
- `columnid` picks the column to sort by, from 1 to 8; without one, column
  1 is used.
- Up to four coaches may be given. A coach whose column id is already
  taken is skipped with a warning.

Each coach runs in its own process. Coach number `n` (counting from 0)
splits the file among `2**n` sorter processes, merges their sorted shares
in order of share and writes them as text to `inputfile.<columnid>`. When
all coaches are done, `mysort` prints the run times of the coordinator,
of each coach and of their sorters, and how many SIGUSR2 signals each
coach counted.

The columns are: customer id, first name, last name, street, house id,
city, postcode and amount. A record is 104 bytes, little-endian: an 8-byte
customer id, three 20-byte NUL-terminated strings, a 4-byte house id, a
20-byte city, a 6-byte postcode, two bytes of padding and a 4-byte float
amount.

The pieces that do the work are available from the modules of
`osprojects.forksort`:

- `record`: `Record`, `Column`, `read_records`, `count_records`
- `sorting`: `heapsort` and `quicksort`, in place, driven by a "greater
  than" predicate
- `partition`: `record_ranges` and `compute_times`
- `arguments`: `parse_arguments`

## Limitations

Fork sort needs a POSIX system: it relies on `fork`, pipes and the
SIGUSR1 and SIGUSR2 signals. Coaches and sorters are started by `mysort`
itself; there are no separate commands for them.

## Tests

```
pip install -e .[test]
pytest
```