"""
This package contains the scripts which deploy the bundled contracts and interact with them.

Each script module exposes a parameter class and a ``run(client, params)`` entry function.

==========
Submodules
==========
* :py:mod:`.buy_tickets`: Buy MusicslayerLottery tickets and withdraw funds
* :py:mod:`.change_value`: Store a value in a Lottery and read it back
* :py:mod:`.get_info`: Deploy a lottery and print its address
* :py:mod:`.play_lottery`: Register players and choose a winner
* :py:mod:`.run_function`: Deploy any contract and issue one transaction
"""
